"""
Conversion des echecs des clients HTTP en ProviderUnavailable.

Les adaptateurs de fournisseurs n'exposent au moteur qu'un seul type
d'erreur : tout ce qui empeche un fournisseur de livrer ses donnees
(reseau, HTTP hors 404, 429 epuise, JSON inattendu, date illisible)
devient ProviderUnavailable.
"""

from contextlib import contextmanager
from typing import Iterator

import httpx

from src.adapters.api.retry import RateLimitError
from src.core.errors import ProviderUnavailable
from src.core.value_objects.provider_record import ProviderName, RawDate


@contextmanager
def provider_errors(provider: ProviderName) -> Iterator[None]:
    """Traduit les erreurs d'un bloc d'appels en ProviderUnavailable."""
    try:
        yield
    except RateLimitError as e:
        raise ProviderUnavailable(provider, "rate limited") from e
    except httpx.HTTPStatusError as e:
        raise ProviderUnavailable(provider, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise ProviderUnavailable(provider, f"network error: {e.__class__.__name__}") from e
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise ProviderUnavailable(provider, f"malformed response: {e}") from e


def parse_raw_date(value) -> RawDate | None:
    """Date brute d'un champ JSON; None si le champ est vide ou absent."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Unexpected date value: {value!r}")
    if not value.strip():
        return None
    return RawDate.parse(value)
