"""
Heuristiques de region du spectateur et de decalage de date.

Fonctions pures, sans effet de bord:
- infer_viewer_region : region du spectateur (preference, sinon locale, sinon US)
- resolve_viewer_timezone : fuseau IANA utilise pour le jour local
- is_eastern_shift_candidate : titre des Ameriques vu depuis l'hemisphere Est
- is_global_simultaneous_releaser : diffuseur a sortie mondiale simultanee
- shift_days : decalage (0 ou 1 jour) a appliquer a une date nue

Ces regles sont des approximations assumees : une diffusion americaine du
soir tombe le lendemain pour un spectateur europeen ou asiatique. Elles ne
remplacent pas une vraie conversion de fuseaux et ne doivent pas l'essayer.
"""

import re
from typing import Iterable, Optional, Sequence

from src.core.value_objects.provider_record import RawDate
from src.utils.constants import (
    AMERICAS_ORIGIN_COUNTRIES,
    COUNTRY_TIMEZONES,
    DEFAULT_TIMEZONE,
    DEFAULT_VIEWER_REGION,
    EASTERN_VIEWER_REGIONS,
    GLOBAL_STREAMERS,
)

# "en-GB", "en_GB.UTF-8", "fr_FR@euro"
_LOCALE_REGION_PATTERN = re.compile(r"^[A-Za-z]{2,3}[-_]([A-Za-z]{2})\b")


def infer_viewer_region(
    override: Optional[str] = None,
    locale_tag: Optional[str] = None,
) -> str:
    """
    Determine la region du spectateur.

    Args:
        override: Preference explicite de l'utilisateur (prioritaire)
        locale_tag: Etiquette de locale (ex: "en-GB", "fr_FR.UTF-8")

    Returns:
        Code pays ISO 3166-1 en majuscules, "US" par defaut
    """
    if override and override.strip():
        return override.strip().upper()

    if locale_tag:
        match = _LOCALE_REGION_PATTERN.match(locale_tag.strip())
        if match:
            return match.group(1).upper()

    return DEFAULT_VIEWER_REGION


def resolve_viewer_timezone(region: str, override: Optional[str] = None) -> str:
    """Fuseau explicite si fourni, sinon celui du pays, sinon UTC."""
    if override:
        return override
    return COUNTRY_TIMEZONES.get(region.upper(), DEFAULT_TIMEZONE)


def is_eastern_shift_candidate(
    origin_countries: Sequence[str],
    viewer_region: str,
) -> bool:
    """
    Indique si un titre doit etre decale d'un jour pour ce spectateur.

    Vrai si le pays d'origine principal (le premier liste) est dans les
    Ameriques et si le spectateur est dans l'hemisphere Est.
    """
    if not origin_countries:
        return False
    primary_origin = origin_countries[0].upper()
    return (
        primary_origin in AMERICAS_ORIGIN_COUNTRIES
        and viewer_region.upper() in EASTERN_VIEWER_REGIONS
    )


def is_global_simultaneous_releaser(networks: Iterable[str]) -> bool:
    """Vrai si un diffuseur associe est une plateforme a sortie mondiale."""
    return any(
        streamer in network
        for network in networks
        if network
        for streamer in GLOBAL_STREAMERS
    )


def shift_days(
    raw_date: RawDate,
    origin_countries: Sequence[str],
    viewer_region: str,
    enabled: bool = True,
) -> int:
    """
    Nombre de jours (0 ou 1) a ajouter a une date pour le jour percu.

    Jamais applique a un horodatage : un instant precis encode deja
    le bon jour une fois converti dans le fuseau du spectateur.
    """
    if not enabled or raw_date.has_timestamp:
        return 0
    return 1 if is_eastern_shift_candidate(origin_countries, viewer_region) else 0
