"""
Client TVMaze pour les dates de diffusion par episode.

TVMaze est interroge via un identifiant croise (IMDb, sinon TVDB) : il n'a
pas de correspondance directe avec les IDs TMDB. Chaque episode porte
`airstamp` (horodatage ISO avec fuseau) et `airdate` (date locale au
diffuseur, moins precise).

API publique, sans cle. Reference: https://www.tvmaze.com/api
"""

from typing import Optional

import httpx

from src.adapters.api.cache import APICache, NullCache
from src.adapters.api.retry import is_not_found, request_with_retry


class TVMazeClient:
    """
    Client TVMaze.

    Attributes:
        BASE_URL: URL de base de l'API TVMaze

    Example:
        client = TVMazeClient(cache=APICache())
        show_id = await client.lookup_show(imdb_id="tt0944947")
        episodes = await client.get_episodes(show_id)
        await client.close()
    """

    BASE_URL = "https://api.tvmaze.com"

    def __init__(self, cache: Optional[APICache] = None, max_attempts: int = 5) -> None:
        """
        Initialise le client TVMaze.

        Args:
            cache: Cache des reponses brutes (aucun cache si None)
            max_attempts: Tentatives sur 429 avant abandon
        """
        self._cache = cache if cache is not None else NullCache()
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Client HTTP unique (connection pooling); suit les redirections de /lookup."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(30.0, connect=10.0),
                follow_redirects=True,
            )
        return self._client

    @property
    def source(self) -> str:
        return "tvmaze"

    async def lookup_show(
        self,
        imdb_id: Optional[str] = None,
        tvdb_id: Optional[int] = None,
    ) -> Optional[int]:
        """
        Trouve l'ID TVMaze d'une serie depuis un identifiant croise.

        Essaie l'ID IMDb puis l'ID TVDB.

        Returns:
            ID TVMaze, ou None si aucune correspondance
        """
        lookups = []
        if imdb_id:
            lookups.append(("imdb", str(imdb_id)))
        if tvdb_id:
            lookups.append(("thetvdb", str(tvdb_id)))

        for param, value in lookups:
            cache_key = f"tvmaze:lookup:{param}:{value}"
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

            client = self._get_client()
            try:
                response = await request_with_retry(
                    client,
                    "GET",
                    "/lookup/shows",
                    max_attempts=self._max_attempts,
                    params={param: value},
                )
            except httpx.HTTPStatusError as e:
                if is_not_found(e):
                    continue
                raise

            show_id = response.json().get("id")
            if show_id is not None:
                await self._cache.set_details(cache_key, show_id)
                return show_id

        return None

    async def get_episodes(self, show_id: int) -> list[dict]:
        """
        Liste complete des episodes d'une serie.

        Returns:
            Liste d'episodes {season, number, airdate, airstamp, name},
            vide si la serie est inconnue
        """
        cache_key = f"tvmaze:episodes:{show_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        client = self._get_client()
        try:
            response = await request_with_retry(
                client,
                "GET",
                f"/shows/{show_id}/episodes",
                max_attempts=self._max_attempts,
                params={"specials": "1"},
            )
        except httpx.HTTPStatusError as e:
            if is_not_found(e):
                return []
            raise

        episodes = response.json()
        await self._cache.set_schedule(cache_key, episodes)
        return episodes

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None
