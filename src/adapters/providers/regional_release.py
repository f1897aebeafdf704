"""
Adaptateur des dates de sortie regionales des films (TMDB release_dates).

TMDB publie les sorties par pays sous forme d'horodatages a minuit, qui ne
sont que des marqueurs de jour : ils sont ramenes a des dates nues.
"""

from typing import Sequence

from src.adapters.api.tmdb_client import TMDBClient
from src.adapters.providers.base import parse_raw_date, provider_errors
from src.core.entities.tracked_title import MediaKind
from src.core.ports.providers import IProviderAdapter
from src.core.value_objects.provider_record import (
    AnyProviderRecord,
    ProviderName,
    RawDate,
    RegionalReleaseRecord,
)
from src.core.value_objects.title_profile import TitleProfile
from src.utils.constants import TMDB_RELEASE_TYPE_MAPPING


class RegionalReleaseAdapter(IProviderAdapter):
    """Adaptateur TMDB des sorties par pays (films uniquement)."""

    media_kinds = frozenset({MediaKind.MOVIE})

    def __init__(self, client: TMDBClient) -> None:
        self._client = client

    @property
    def name(self) -> ProviderName:
        return ProviderName.REGIONAL_RELEASE

    async def fetch(
        self,
        profile: TitleProfile,
        seasons_of_interest: Sequence[int],
    ) -> list[AnyProviderRecord]:
        if not profile.title.is_movie:
            return []

        with provider_errors(self.name):
            results = await self._client.get_movie_release_dates(profile.title_id)
            records: list[AnyProviderRecord] = []
            for country_block in results:
                country = country_block["iso_3166_1"].upper()
                for release in country_block.get("release_dates") or []:
                    kind = TMDB_RELEASE_TYPE_MAPPING.get(release.get("type"))
                    raw_date = parse_raw_date(release.get("release_date"))
                    if kind is None or raw_date is None:
                        continue
                    records.append(
                        RegionalReleaseRecord(
                            title_id=profile.title_id,
                            raw_date=RawDate(day=raw_date.day),
                            release_kind=kind,
                            country_code=country,
                        )
                    )
            return records
