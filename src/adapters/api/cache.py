"""
Cache persistant des reponses brutes des fournisseurs, avec TTL differencies.

Le moteur de calendrier ne met rien en cache lui-meme : ce cache appartient
a la couche client HTTP et ne stocke que du JSON brut. Il utilise diskcache
pour conserver les reponses entre deux lancements de la CLI.

TTL par defaut:
- Calendrier (SCHEDULE_TTL): 12 heures - saisons, dates d'episodes, sorties
- Details (DETAILS_TTL): 7 jours - fiche d'un titre, correspondance d'ids
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Attributes:
        SCHEDULE_TTL: Duree de vie des donnees de calendrier (12h)
        DETAILS_TTL: Duree de vie des fiches et ids (7 jours)

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_schedule("tmdb:season:1399:8", payload)
        data = await cache.get("tmdb:season:1399:8")
    """

    SCHEDULE_TTL = 12 * 60 * 60  # 12 heures en secondes (43200)
    DETAILS_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes (604800)

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(cache_dir)

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Returns:
            La valeur stockee ou None si absente ou expiree
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur avec une duree de vie en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_schedule(self, key: str, value: Any) -> None:
        """Stocke une donnee de calendrier (TTL de 12h)."""
        await self.set(key, value, self.SCHEDULE_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        """Stocke une fiche ou une correspondance d'ids (TTL de 7 jours)."""
        await self.set(key, value, self.DETAILS_TTL)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()


class NullCache:
    """Cache inactif : meme interface qu'APICache, ne stocke rien."""

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def set(self, key: str, value: Any, ttl: int) -> None:
        return None

    async def set_schedule(self, key: str, value: Any) -> None:
        return None

    async def set_details(self, key: str, value: Any) -> None:
        return None

    async def clear(self) -> None:
        return None

    def close(self) -> None:
        return None


def create_api_cache(enabled: bool, cache_dir: str | Path) -> APICache | NullCache:
    """Cache disque si active dans la configuration, sinon cache inactif."""
    if not enabled:
        return NullCache()
    return APICache(cache_dir=str(Path(cache_dir).expanduser()))
