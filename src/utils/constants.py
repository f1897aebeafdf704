"""
Constantes globales pour airdates.

Ce module contient les tables heuristiques du moteur de calendrier:
- Pays d'origine des Ameriques (candidats au decalage d'un jour)
- Regions de spectateurs de l'hemisphere Est
- Plateformes de streaming a sortie mondiale simultanee
- Fuseau horaire par defaut de chaque pays
- Mapping des types de sortie TMDB

Ces listes sont volontairement courtes et approximatives : elles
reproduisent une heuristique, pas une conversion de fuseaux exacte.
"""

from src.core.value_objects.provider_record import ReleaseKind

# Pays d'origine dont les diffusions du soir tombent le lendemain a l'Est
AMERICAS_ORIGIN_COUNTRIES = frozenset({"US", "CA", "MX", "BR"})

# Regions de spectateurs pour lesquelles le decalage d'un jour s'applique
EASTERN_VIEWER_REGIONS = frozenset({
    "GB",
    "DE",
    "FR",
    "IT",
    "ES",
    "NL",
    "SE",
    "NO",
    "DK",
    "FI",
    "AU",
    "NZ",
    "JP",
    "KR",
    "CN",
    "IN",
    "RU",
    "PL",
})

# Plateformes publiant a un instant UTC fixe (comparaison par sous-chaine)
GLOBAL_STREAMERS = (
    "Netflix",
    "Disney+",
    "Amazon",
    "Apple TV+",
    "Hulu",
    "HBO Max",
    "Peacock",
    "Paramount+",
)

# Heure UTC injectee sur les dates nues des plateformes mondiales (minuit PT)
GLOBAL_RELEASE_HOUR_UTC = 8

DEFAULT_VIEWER_REGION = "US"
DEFAULT_TIMEZONE = "UTC"

# Fuseau representatif de chaque pays
COUNTRY_TIMEZONES = {
    "US": "America/New_York",
    "CA": "America/Toronto",
    "GB": "Europe/London",
    "IE": "Europe/Dublin",
    "JP": "Asia/Tokyo",
    "KR": "Asia/Seoul",
    "CN": "Asia/Shanghai",
    "AU": "Australia/Sydney",
    "NZ": "Pacific/Auckland",
    "DE": "Europe/Berlin",
    "FR": "Europe/Paris",
    "ES": "Europe/Madrid",
    "IT": "Europe/Rome",
    "NL": "Europe/Amsterdam",
    "SE": "Europe/Stockholm",
    "NO": "Europe/Oslo",
    "DK": "Europe/Copenhagen",
    "FI": "Europe/Helsinki",
    "PL": "Europe/Warsaw",
    "BR": "America/Sao_Paulo",
    "MX": "America/Mexico_City",
    "AR": "America/Argentina/Buenos_Aires",
    "IN": "Asia/Kolkata",
    "RU": "Europe/Moscow",
    "ZA": "Africa/Johannesburg",
}

# Types numeriques de /movie/{id}/release_dates (6 = tv, ignore)
TMDB_RELEASE_TYPE_MAPPING = {
    1: ReleaseKind.PREMIERE,
    2: ReleaseKind.THEATRICAL,
    3: ReleaseKind.THEATRICAL,
    4: ReleaseKind.DIGITAL,
    5: ReleaseKind.PHYSICAL,
}

# Valeurs textuelles de Trakt /movies/{id}/releases ("tv", "unknown" ignores)
TRAKT_RELEASE_TYPE_MAPPING = {
    "premiere": ReleaseKind.PREMIERE,
    "limited": ReleaseKind.THEATRICAL,
    "theatrical": ReleaseKind.THEATRICAL,
    "digital": ReleaseKind.DIGITAL,
    "physical": ReleaseKind.PHYSICAL,
}

# Nombre de saisons regulieres recentes interrogees par titre
RECENT_SEASONS_COUNT = 2

SPECIALS_SEASON = 0
