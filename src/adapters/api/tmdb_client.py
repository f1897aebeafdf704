"""
Client TMDB pour le catalogue des titres suivis.

Fournit le JSON brut des endpoints utilises par le moteur de calendrier:
fiche d'une serie (saisons, diffuseurs, ids externes), detail d'une saison
(date nominale par episode), fiche d'un film et dates de sortie par pays.
La traduction en ProviderRecord est faite par les adaptateurs.

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    show = await client.get_show_details(1399)
    season = await client.get_season_details(1399, 8)
    await client.close()
"""

from typing import Any, Optional

import httpx

from src.adapters.api.cache import APICache, NullCache
from src.adapters.api.retry import is_not_found, request_with_retry


class TMDBClient:
    """
    Client API TMDB v3.

    Chaque methode retourne le JSON brut, ou None (liste vide pour les
    collections) quand TMDB repond 404. Les autres erreurs HTTP et les
    erreurs reseau sont propagees a l'adaptateur.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3

    Example:
        client = TMDBClient(api_key="xxx", cache=APICache())
        releases = await client.get_movie_release_dates(27205)
        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        cache: Optional[APICache] = None,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API v3 ou Read Access Token v4
            cache: Cache des reponses brutes (aucun cache si None)
            max_attempts: Tentatives sur 429 avant abandon
        """
        self._api_key = api_key or ""
        self._cache = cache if cache is not None else NullCache()
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def _get_json(
        self,
        path: str,
        cache_key: str,
        ttl: int,
        params: Optional[dict[str, str]] = None,
    ) -> Optional[Any]:
        """GET cache-first; None si TMDB repond 404."""
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        client = self._get_client()
        try:
            response = await request_with_retry(
                client, "GET", path, max_attempts=self._max_attempts, params=params
            )
        except httpx.HTTPStatusError as e:
            if is_not_found(e):
                return None
            raise

        data = response.json()
        await self._cache.set(cache_key, data, ttl)
        return data

    async def get_show_details(self, show_id: int) -> Optional[dict]:
        """
        Fiche d'une serie avec ses ids externes (IMDb, TVDB).

        Contient seasons[], networks[], origin_country[], poster_path...

        Returns:
            JSON de la serie, ou None si l'ID est inconnu
        """
        return await self._get_json(
            f"/tv/{show_id}",
            cache_key=f"tmdb:tv:{show_id}",
            ttl=APICache.DETAILS_TTL,
            params={"append_to_response": "external_ids"},
        )

    async def get_season_details(self, show_id: int, season_number: int) -> Optional[dict]:
        """
        Detail d'une saison : episodes[] avec air_date (YYYY-MM-DD).

        Returns:
            JSON de la saison, ou None si la saison n'existe pas
        """
        return await self._get_json(
            f"/tv/{show_id}/season/{season_number}",
            cache_key=f"tmdb:season:{show_id}:{season_number}",
            ttl=APICache.SCHEDULE_TTL,
        )

    async def get_movie_details(self, movie_id: int) -> Optional[dict]:
        """
        Fiche d'un film : release_date principale, origin_country, posters.

        Returns:
            JSON du film, ou None si l'ID est inconnu
        """
        return await self._get_json(
            f"/movie/{movie_id}",
            cache_key=f"tmdb:movie:{movie_id}",
            ttl=APICache.DETAILS_TTL,
        )

    async def get_movie_release_dates(self, movie_id: int) -> list[dict]:
        """
        Dates de sortie par pays d'un film.

        Returns:
            Liste results[] : {iso_3166_1, release_dates: [{type, release_date}]},
            vide si le film est inconnu
        """
        data = await self._get_json(
            f"/movie/{movie_id}/release_dates",
            cache_key=f"tmdb:release_dates:{movie_id}",
            ttl=APICache.SCHEDULE_TTL,
        )
        if not data:
            return []
        return data.get("results", [])

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None
