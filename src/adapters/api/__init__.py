"""
Clients API externes des fournisseurs de dates.

Ce module fournit les clients HTTP bruts (JSON) des fournisseurs:
- TMDB: catalogue principal et dates de sortie par pays des films
- TVMaze: dates et horodatages de diffusion par episode
- Trakt: suivi communautaire (horodatages first_aired, sorties de films)

Infrastructure partagee:
- APICache: Cache persistant avec TTL differencies (calendrier 12h, fiches 7j)
- RateLimitError: Exception pour les erreurs 429
- with_retry: Decorateur avec backoff exponentiel pour gerer le rate limiting

La traduction en ProviderRecord est faite par src/adapters/providers/.
"""

from src.adapters.api.cache import APICache, NullCache, create_api_cache
from src.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.api.tmdb_client import TMDBClient
from src.adapters.api.trakt_client import TraktClient
from src.adapters.api.tvmaze_client import TVMazeClient

__all__ = [
    "APICache",
    "NullCache",
    "create_api_cache",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
    "TMDBClient",
    "TraktClient",
    "TVMazeClient",
]
