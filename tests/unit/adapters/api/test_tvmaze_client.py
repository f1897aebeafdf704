"""
Tests pour TVMazeClient.

Utilise respx pour simuler l'API TVMaze et verifie:
- Recherche de l'ID TVMaze par IMDb puis par TVDB
- Liste des episodes (specials inclus)
- 404 = absence de donnees
- Cache consulte avant l'API
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from src.adapters.api.cache import APICache
from src.adapters.api.tvmaze_client import TVMazeClient
from tests.fixtures.tvmaze_responses import TVMAZE_EPISODES_RESPONSE, TVMAZE_LOOKUP_RESPONSE

BASE = "https://api.tvmaze.com"


@pytest.fixture
def mock_cache() -> AsyncMock:
    cache = AsyncMock(spec=APICache)
    cache.get.return_value = None
    return cache


@pytest.fixture
def client(mock_cache: AsyncMock) -> TVMazeClient:
    return TVMazeClient(cache=mock_cache)


class TestLookupShow:
    """Tests pour lookup_show()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_lookup_by_imdb(self, client: TVMazeClient, mock_cache: AsyncMock):
        route = respx.get(f"{BASE}/lookup/shows", params={"imdb": "tt3581920"}).mock(
            return_value=httpx.Response(200, json=TVMAZE_LOOKUP_RESPONSE)
        )

        show_id = await client.lookup_show(imdb_id="tt3581920", tvdb_id=392256)

        assert show_id == 46562
        assert route.call_count == 1
        mock_cache.set_details.assert_called_once_with("tvmaze:lookup:imdb:tt3581920", 46562)

    @pytest.mark.asyncio
    @respx.mock
    async def test_falls_back_to_tvdb_on_404(self, client: TVMazeClient):
        respx.get(f"{BASE}/lookup/shows", params={"imdb": "tt3581920"}).mock(
            return_value=httpx.Response(404)
        )
        respx.get(f"{BASE}/lookup/shows", params={"thetvdb": "392256"}).mock(
            return_value=httpx.Response(200, json=TVMAZE_LOOKUP_RESPONSE)
        )

        assert await client.lookup_show(imdb_id="tt3581920", tvdb_id=392256) == 46562

    @pytest.mark.asyncio
    @respx.mock
    async def test_none_when_nothing_matches(self, client: TVMazeClient):
        respx.get(f"{BASE}/lookup/shows").mock(return_value=httpx.Response(404))

        assert await client.lookup_show(imdb_id="tt0000001") is None

    @pytest.mark.asyncio
    async def test_none_without_ids(self, client: TVMazeClient):
        assert await client.lookup_show() is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_cached_lookup_skips_api(self, client: TVMazeClient, mock_cache: AsyncMock):
        mock_cache.get.return_value = 46562
        route = respx.get(f"{BASE}/lookup/shows").mock(return_value=httpx.Response(500))

        assert await client.lookup_show(imdb_id="tt3581920") == 46562
        assert not route.called


class TestGetEpisodes:
    """Tests pour get_episodes()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_episodes_with_specials(
        self, client: TVMazeClient, mock_cache: AsyncMock
    ):
        route = respx.get(f"{BASE}/shows/46562/episodes").mock(
            return_value=httpx.Response(200, json=TVMAZE_EPISODES_RESPONSE)
        )

        episodes = await client.get_episodes(46562)

        assert len(episodes) == 4
        assert route.calls.last.request.url.params["specials"] == "1"
        mock_cache.set_schedule.assert_called_once_with(
            "tvmaze:episodes:46562", TVMAZE_EPISODES_RESPONSE
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_on_404(self, client: TVMazeClient):
        respx.get(f"{BASE}/shows/1/episodes").mock(return_value=httpx.Response(404))

        assert await client.get_episodes(1) == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_propagates(self, client: TVMazeClient):
        respx.get(f"{BASE}/shows/46562/episodes").mock(return_value=httpx.Response(502))

        with pytest.raises(httpx.HTTPStatusError):
            await client.get_episodes(46562)


@pytest.mark.asyncio
async def test_close_cleans_up_resources(client: TVMazeClient):
    client._get_client()

    await client.close()

    assert client._client is None
    assert client.source == "tvmaze"
