"""
Adaptateur du suivi communautaire (Trakt).

Interroge uniquement si l'utilisateur a fourni un jeton d'acces : le jeton
est porte par l'adaptateur, cree pour chaque instantane de preferences.
"""

from typing import Optional, Sequence

from src.adapters.api.trakt_client import TraktClient
from src.adapters.providers.base import parse_raw_date, provider_errors
from src.core.errors import NoDataFound
from src.core.ports.providers import IProviderAdapter
from src.core.value_objects.provider_record import (
    AnyProviderRecord,
    CommunityRecord,
    EpisodeDisplay,
    ProviderName,
)
from src.core.value_objects.title_profile import TitleProfile
from src.utils.constants import TRAKT_RELEASE_TYPE_MAPPING


class CommunityTrackingAdapter(IProviderAdapter):
    """
    Adaptateur Trakt (series et films).

    Example:
        adapter = CommunityTrackingAdapter(client, access_token="tok")
        records = await adapter.fetch(profile, (7, 8))
    """

    def __init__(self, client: TraktClient, access_token: Optional[str] = None) -> None:
        self._client = client
        self._access_token = access_token

    @property
    def name(self) -> ProviderName:
        return ProviderName.COMMUNITY_TRACKING

    async def fetch(
        self,
        profile: TitleProfile,
        seasons_of_interest: Sequence[int],
    ) -> list[AnyProviderRecord]:
        kind = "movie" if profile.title.is_movie else "show"
        with provider_errors(self.name):
            trakt_id = await self._client.search_by_tmdb(
                profile.title_id, kind, access_token=self._access_token
            )
            if trakt_id is None:
                raise NoDataFound(f"No Trakt {kind} for TMDB id {profile.title_id}")
            if profile.title.is_movie:
                return await self._movie_records(profile, trakt_id)
            return await self._episode_records(profile, trakt_id, seasons_of_interest)

    async def _episode_records(
        self,
        profile: TitleProfile,
        trakt_id: int,
        seasons_of_interest: Sequence[int],
    ) -> list[AnyProviderRecord]:
        records: list[AnyProviderRecord] = []
        for season_number in seasons_of_interest:
            episodes = await self._client.get_season(
                trakt_id, season_number, access_token=self._access_token
            )
            for episode in episodes:
                raw_date = parse_raw_date(episode.get("first_aired"))
                if raw_date is None or episode.get("number") is None:
                    continue
                records.append(
                    CommunityRecord(
                        title_id=profile.title_id,
                        raw_date=raw_date,
                        season_number=int(episode.get("season", season_number)),
                        episode_number=int(episode["number"]),
                        display=EpisodeDisplay(
                            name=episode.get("title") or None,
                            overview=episode.get("overview") or None,
                        ),
                    )
                )
        return records

    async def _movie_records(
        self,
        profile: TitleProfile,
        trakt_id: int,
    ) -> list[AnyProviderRecord]:
        records: list[AnyProviderRecord] = []
        releases = await self._client.get_movie_releases(trakt_id, access_token=self._access_token)
        for release in releases:
            kind = TRAKT_RELEASE_TYPE_MAPPING.get(release.get("release_type"))
            raw_date = parse_raw_date(release.get("release_date"))
            if kind is None or raw_date is None:
                continue
            country = release.get("country")
            records.append(
                CommunityRecord(
                    title_id=profile.title_id,
                    raw_date=raw_date,
                    release_kind=kind,
                    country_code=country.upper() if country else None,
                )
            )
        return records
