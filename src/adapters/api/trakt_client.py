"""
Client Trakt v2 pour le suivi communautaire.

Trakt fournit des horodatages de premiere diffusion (`first_aired`) plus
precis que les dates nominales du catalogue, ainsi que les dates de sortie
par pays des films. Le jeton d'acces de l'utilisateur n'est pas conserve
par le client : il est passe a chaque appel depuis l'instantane des
preferences.

Reference: https://trakt.docs.apiary.io
"""

from typing import Optional

import httpx

from src.adapters.api.cache import APICache, NullCache
from src.adapters.api.retry import is_not_found, request_with_retry


class TraktClient:
    """
    Client API Trakt v2.

    Attributes:
        BASE_URL: URL de base de l'API Trakt
        API_VERSION: Version d'API envoyee dans l'en-tete trakt-api-version

    Example:
        client = TraktClient(client_id="xxx", cache=APICache())
        trakt_id = await client.search_by_tmdb(1399, "show", access_token="tok")
        episodes = await client.get_season(trakt_id, 8, access_token="tok")
        await client.close()
    """

    BASE_URL = "https://api.trakt.tv"
    API_VERSION = "2"

    def __init__(
        self,
        client_id: Optional[str],
        cache: Optional[APICache] = None,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client Trakt.

        Args:
            client_id: Client ID de l'application Trakt (en-tete trakt-api-key)
            cache: Cache des reponses brutes (aucun cache si None)
            max_attempts: Tentatives sur 429 avant abandon
        """
        self._client_id = client_id or ""
        self._cache = cache if cache is not None else NullCache()
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={
                    "Content-Type": "application/json",
                    "trakt-api-version": self.API_VERSION,
                    "trakt-api-key": self._client_id,
                },
                timeout=30.0,
            )
        return self._client

    @property
    def source(self) -> str:
        return "trakt"

    @staticmethod
    def _auth_headers(access_token: Optional[str]) -> dict[str, str]:
        if not access_token:
            return {}
        return {"Authorization": f"Bearer {access_token}"}

    async def _get_json(
        self,
        path: str,
        access_token: Optional[str],
        params: Optional[dict[str, str]] = None,
    ) -> Optional[list]:
        """GET authentifie; None si Trakt repond 404."""
        client = self._get_client()
        try:
            response = await request_with_retry(
                client,
                "GET",
                path,
                max_attempts=self._max_attempts,
                params=params,
                headers=self._auth_headers(access_token),
            )
        except httpx.HTTPStatusError as e:
            if is_not_found(e):
                return None
            raise
        return response.json()

    async def search_by_tmdb(
        self,
        tmdb_id: int,
        kind: str,
        access_token: Optional[str] = None,
    ) -> Optional[int]:
        """
        Trouve l'ID Trakt correspondant a un ID TMDB.

        Args:
            tmdb_id: ID TMDB du titre
            kind: "show" ou "movie"
            access_token: Jeton OAuth de l'utilisateur

        Returns:
            ID Trakt, ou None si aucun resultat du bon type
        """
        cache_key = f"trakt:search:{kind}:{tmdb_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        results = await self._get_json(
            f"/search/tmdb/{tmdb_id}", access_token, params={"type": kind}
        )
        for result in results or []:
            if result.get("type") != kind:
                continue
            trakt_id = (result.get(kind) or {}).get("ids", {}).get("trakt")
            if trakt_id is not None:
                await self._cache.set_details(cache_key, trakt_id)
                return trakt_id
        return None

    async def get_season(
        self,
        trakt_id: int,
        season_number: int,
        access_token: Optional[str] = None,
    ) -> list[dict]:
        """
        Episodes d'une saison avec `first_aired` (horodatage ISO UTC).

        Returns:
            Liste d'episodes {season, number, title, first_aired, overview},
            vide si la saison est inconnue
        """
        cache_key = f"trakt:season:{trakt_id}:{season_number}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        episodes = await self._get_json(
            f"/shows/{trakt_id}/seasons/{season_number}",
            access_token,
            params={"extended": "full"},
        )
        if episodes is None:
            return []
        await self._cache.set_schedule(cache_key, episodes)
        return episodes

    async def get_movie_releases(
        self,
        trakt_id: int,
        access_token: Optional[str] = None,
    ) -> list[dict]:
        """
        Dates de sortie d'un film, tous pays confondus.

        Returns:
            Liste {country, release_date, release_type, certification},
            vide si le film est inconnu
        """
        cache_key = f"trakt:releases:{trakt_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        releases = await self._get_json(f"/movies/{trakt_id}/releases", access_token)
        if releases is None:
            return []
        await self._cache.set_schedule(cache_key, releases)
        return releases

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None
