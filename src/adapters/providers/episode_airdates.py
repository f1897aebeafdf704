"""
Adaptateur des dates de diffusion par episode (TVMaze).

Prefere l'horodatage `airstamp` a la date locale `airdate`. Series
uniquement : TVMaze ne couvre pas les films.
"""

from typing import Sequence

from src.adapters.api.tvmaze_client import TVMazeClient
from src.adapters.providers.base import parse_raw_date, provider_errors
from src.core.entities.tracked_title import MediaKind
from src.core.errors import NoDataFound
from src.core.ports.providers import IProviderAdapter
from src.core.value_objects.provider_record import (
    AnyProviderRecord,
    EpisodeAirdateRecord,
    EpisodeDisplay,
    ProviderName,
)
from src.core.value_objects.title_profile import TitleProfile


class EpisodeAirdatesAdapter(IProviderAdapter):
    """Adaptateur TVMaze."""

    media_kinds = frozenset({MediaKind.SERIES})

    def __init__(self, client: TVMazeClient) -> None:
        self._client = client

    @property
    def name(self) -> ProviderName:
        return ProviderName.EPISODE_AIRDATES

    async def fetch(
        self,
        profile: TitleProfile,
        seasons_of_interest: Sequence[int],
    ) -> list[AnyProviderRecord]:
        """
        Dates de diffusion des episodes des saisons d'interet.

        Sans identifiant croise (IMDb, TVDB) ou sans correspondance TVMaze,
        le fournisseur n'a simplement pas de donnees.
        """
        ids = profile.external_ids
        if profile.title.is_movie or ids.is_empty:
            return []

        with provider_errors(self.name):
            show_id = await self._client.lookup_show(imdb_id=ids.imdb_id, tvdb_id=ids.tvdb_id)
            if show_id is None:
                raise NoDataFound(f"No TVMaze show for title {profile.title_id}")

            wanted = set(seasons_of_interest)
            records: list[AnyProviderRecord] = []
            for episode in await self._client.get_episodes(show_id):
                season_number = episode.get("season")
                episode_number = episode.get("number")
                if season_number not in wanted or episode_number is None:
                    continue
                raw_date = parse_raw_date(episode.get("airstamp")) or parse_raw_date(
                    episode.get("airdate")
                )
                if raw_date is None:
                    continue
                records.append(
                    EpisodeAirdateRecord(
                        title_id=profile.title_id,
                        raw_date=raw_date,
                        season_number=int(season_number),
                        episode_number=int(episode_number),
                        display=EpisodeDisplay(name=episode.get("name") or None),
                    )
                )
            return records
