"""
Mecanisme de retry avec backoff exponentiel pour les API de dates.

Gere automatiquement les erreurs 429 (rate limiting) des fournisseurs
(TMDB, TVMaze, Trakt) en relancant les requetes avec un delai croissant
et du jitter aleatoire. TVMaze en particulier limite a 20 appels / 10s.

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=5, max_wait=60)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", url)
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie ou illisible.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Retry-After en secondes; les dates HTTP sont ignorees."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur pour relancer sur RateLimitError avec backoff exponentiel.

    Utilise wait_random_exponential pour ajouter du jitter : plusieurs titres
    resolus en parallele ne relancent pas tous au meme instant.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429.

    Les reponses 429 deviennent des RateLimitError relancees avec backoff.
    Les autres erreurs HTTP (4xx, 5xx) sont propagees immediatement :
    c'est l'adaptateur qui decide si un 404 signifie "pas de donnees".

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL (ou chemin relatif a base_url)
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
        httpx.TransportError: Pour les erreurs reseau
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()


def is_not_found(error: httpx.HTTPStatusError) -> bool:
    """True si l'erreur HTTP est un 404 (absence de donnees, pas une panne)."""
    return error.response.status_code == 404
