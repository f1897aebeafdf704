"""
Adaptateur du catalogue principal (TMDB).

Decrit chaque titre suivi (saisons, diffuseurs, pays d'origine, ids
croises) et fournit la date nominale de chaque episode, ou la date de
sortie principale d'un film.
"""

from typing import Sequence

from loguru import logger

from src.adapters.api.tmdb_client import TMDBClient
from src.adapters.providers.base import parse_raw_date, provider_errors
from src.core.entities.tracked_title import TrackedTitle
from src.core.errors import InvalidTitleReference
from src.core.ports.providers import ICatalogAdapter
from src.core.value_objects.provider_record import (
    AnyProviderRecord,
    CatalogRecord,
    EpisodeDisplay,
    ProviderName,
    ReleaseKind,
)
from src.core.value_objects.title_profile import ExternalIds, TitleProfile


class CatalogAdapter(ICatalogAdapter):
    """
    Adaptateur TMDB pour le catalogue.

    Example:
        adapter = CatalogAdapter(TMDBClient(api_key="xxx"))
        profile = await adapter.describe(title)
        records = await adapter.fetch(profile, seasons_of_interest=(7, 8))
    """

    def __init__(self, client: TMDBClient) -> None:
        self._client = client

    @property
    def name(self) -> ProviderName:
        return ProviderName.CATALOG

    async def describe(self, title: TrackedTitle) -> TitleProfile:
        """
        Decrit un titre depuis sa fiche TMDB.

        Raises:
            InvalidTitleReference: ID inconnu de TMDB
            ProviderUnavailable: Erreur reseau ou fiche inexploitable
        """
        with provider_errors(self.name):
            if title.is_movie:
                data = await self._client.get_movie_details(title.id)
            else:
                data = await self._client.get_show_details(title.id)

            if data is None:
                raise InvalidTitleReference(title.id, "unknown to catalog")

            if title.is_movie:
                return self._movie_profile(title, data)
            return self._show_profile(title, data)

    @staticmethod
    def _show_profile(title: TrackedTitle, data: dict) -> TitleProfile:
        external = data.get("external_ids") or {}
        tvdb_id = external.get("tvdb_id")
        return TitleProfile(
            title=title,
            season_numbers=tuple(
                int(season["season_number"])
                for season in data.get("seasons") or []
                if season.get("season_number") is not None
            ),
            networks=tuple(
                network["name"]
                for network in data.get("networks") or []
                if network.get("name")
            ),
            origin_countries=tuple(
                code.upper() for code in data.get("origin_country") or []
            ),
            external_ids=ExternalIds(
                imdb_id=external.get("imdb_id") or None,
                tvdb_id=int(tvdb_id) if tvdb_id else None,
            ),
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            overview=data.get("overview") or None,
        )

    @staticmethod
    def _movie_profile(title: TrackedTitle, data: dict) -> TitleProfile:
        origin = data.get("origin_country") or [
            country["iso_3166_1"]
            for country in data.get("production_countries") or []
            if country.get("iso_3166_1")
        ]
        return TitleProfile(
            title=title,
            origin_countries=tuple(code.upper() for code in origin),
            external_ids=ExternalIds(imdb_id=data.get("imdb_id") or None),
            primary_release_date=data.get("release_date") or None,
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            overview=data.get("overview") or None,
        )

    async def fetch(
        self,
        profile: TitleProfile,
        seasons_of_interest: Sequence[int],
    ) -> list[AnyProviderRecord]:
        """Dates nominales des episodes des saisons d'interet, ou sortie principale."""
        with provider_errors(self.name):
            if profile.title.is_movie:
                return self._movie_records(profile)

            records: list[AnyProviderRecord] = []
            for season_number in seasons_of_interest:
                season = await self._client.get_season_details(profile.title_id, season_number)
                if season is None:
                    logger.debug(
                        "Saison absente du catalogue",
                        title_id=profile.title_id,
                        season=season_number,
                    )
                    continue
                records.extend(self._episode_records(profile, season_number, season))
            return records

    @staticmethod
    def _movie_records(profile: TitleProfile) -> list[AnyProviderRecord]:
        raw_date = parse_raw_date(profile.primary_release_date)
        if raw_date is None:
            return []
        return [
            CatalogRecord(
                title_id=profile.title_id,
                raw_date=raw_date,
                release_kind=ReleaseKind.THEATRICAL,
            )
        ]

    @staticmethod
    def _episode_records(
        profile: TitleProfile,
        season_number: int,
        season: dict,
    ) -> list[AnyProviderRecord]:
        records: list[AnyProviderRecord] = []
        for episode in season.get("episodes") or []:
            raw_date = parse_raw_date(episode.get("air_date"))
            if raw_date is None:
                continue
            records.append(
                CatalogRecord(
                    title_id=profile.title_id,
                    raw_date=raw_date,
                    season_number=int(episode.get("season_number", season_number)),
                    episode_number=int(episode["episode_number"]),
                    display=EpisodeDisplay(
                        name=episode.get("name") or None,
                        overview=episode.get("overview") or None,
                        still_path=episode.get("still_path"),
                    ),
                )
            )
        return records
