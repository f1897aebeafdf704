"""
Utilitaires et constantes pour airdates.

Ce module contient les tables heuristiques partagees.
"""

from src.utils.constants import (
    AMERICAS_ORIGIN_COUNTRIES,
    COUNTRY_TIMEZONES,
    EASTERN_VIEWER_REGIONS,
    GLOBAL_STREAMERS,
)

__all__ = [
    "AMERICAS_ORIGIN_COUNTRIES",
    "EASTERN_VIEWER_REGIONS",
    "GLOBAL_STREAMERS",
    "COUNTRY_TIMEZONES",
]
