"""
Tests pour CommunityTrackingAdapter (Trakt).
"""

import httpx
import pytest
import respx

from src.adapters.api.trakt_client import TraktClient
from src.adapters.providers.community_tracking import CommunityTrackingAdapter
from src.core.entities.tracked_title import MediaKind
from src.core.errors import NoDataFound, ProviderUnavailable
from src.core.value_objects.provider_record import ProviderName, ReleaseKind
from tests.fixtures.trakt_responses import (
    TRAKT_MOVIE_RELEASES_RESPONSE,
    TRAKT_SEARCH_MOVIE_RESPONSE,
    TRAKT_SEARCH_SHOW_RESPONSE,
    TRAKT_SEASON_RESPONSE,
)

BASE = "https://api.trakt.tv"


@pytest.fixture
def adapter() -> CommunityTrackingAdapter:
    client = TraktClient(client_id="test_client_id", max_attempts=1)
    return CommunityTrackingAdapter(client, access_token="user_token")


def test_supports_both_kinds(adapter):
    assert adapter.supports(MediaKind.SERIES)
    assert adapter.supports(MediaKind.MOVIE)


@pytest.mark.asyncio
@respx.mock
async def test_episode_records_use_first_aired(adapter, us_series_profile):
    respx.get(f"{BASE}/search/tmdb/100088").mock(
        return_value=httpx.Response(200, json=TRAKT_SEARCH_SHOW_RESPONSE)
    )
    season_route = respx.get(f"{BASE}/shows/158947/seasons/2").mock(
        return_value=httpx.Response(200, json=TRAKT_SEASON_RESPONSE)
    )

    records = await adapter.fetch(us_series_profile, (2,))

    # L'episode 2 n'a pas de first_aired
    assert len(records) == 1
    assert records[0].provider is ProviderName.COMMUNITY_TRACKING
    assert records[0].episode_key == (2, 1)
    assert records[0].has_timestamp
    assert records[0].display.name == "Future Days"
    assert season_route.calls.last.request.headers["Authorization"] == "Bearer user_token"


@pytest.mark.asyncio
@respx.mock
async def test_movie_release_records(adapter, movie_profile):
    respx.get(f"{BASE}/search/tmdb/693134").mock(
        return_value=httpx.Response(200, json=TRAKT_SEARCH_MOVIE_RESPONSE)
    )
    respx.get(f"{BASE}/movies/567891/releases").mock(
        return_value=httpx.Response(200, json=TRAKT_MOVIE_RELEASES_RESPONSE)
    )

    records = await adapter.fetch(movie_profile, ())

    # La diffusion TV n'est pas un type de sortie suivi
    assert [(r.country_code, r.release_kind) for r in records] == [
        ("US", ReleaseKind.THEATRICAL),
        ("US", ReleaseKind.DIGITAL),
        ("GB", ReleaseKind.THEATRICAL),
    ]


@pytest.mark.asyncio
@respx.mock
async def test_unknown_on_trakt_means_no_data(adapter, us_series_profile):
    respx.get(f"{BASE}/search/tmdb/100088").mock(return_value=httpx.Response(200, json=[]))

    with pytest.raises(NoDataFound):
        await adapter.fetch(us_series_profile, (2,))


@pytest.mark.asyncio
@respx.mock
async def test_expired_token_is_unavailable(adapter, us_series_profile):
    respx.get(f"{BASE}/search/tmdb/100088").mock(return_value=httpx.Response(401))

    with pytest.raises(ProviderUnavailable) as exc_info:
        await adapter.fetch(us_series_profile, (2,))

    assert exc_info.value.provider is ProviderName.COMMUNITY_TRACKING
    assert exc_info.value.reason == "HTTP 401"


@pytest.mark.asyncio
@respx.mock
async def test_timeout_is_unavailable(adapter, us_series_profile):
    respx.get(f"{BASE}/search/tmdb/100088").mock(side_effect=httpx.ReadTimeout("slow"))

    with pytest.raises(ProviderUnavailable) as exc_info:
        await adapter.fetch(us_series_profile, (2,))

    assert exc_info.value.reason == "network error: ReadTimeout"
