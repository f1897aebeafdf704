"""
Instantane immutable des preferences utilisateur pour une resolution.

Capture une seule fois au debut d'une agregation et partage en lecture
seule entre toutes les taches concurrentes : le moteur ne lit jamais
d'etat global en cours de calcul.
"""

from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True)
class ScheduleSettings:
    """
    Preferences figees pour une resolution de calendrier.

    Attributs:
        viewer_region: Pays du spectateur (ISO 3166-1, ex: "GB")
        viewer_timezone: Nom IANA du fuseau utilise pour le jour local
        time_shift_enabled: Active le decalage d'un jour (origine Ameriques)
        ignore_specials: Masque les episodes de la saison 0
        hide_theatrical: Masque les sorties cinema des films
        community_tracking_access_token: Jeton Trakt; absent = Trakt non interroge
        provider_timeout_seconds: Delai maximum par appel de fournisseur
        provider_retry_attempts: Tentatives par appel (2 = une relance)
        retry_wait_seconds: Attente avant la relance
        max_concurrent_titles: Nombre de titres resolus en parallele
    """

    viewer_region: str = "US"
    viewer_timezone: str = "America/New_York"
    time_shift_enabled: bool = False
    ignore_specials: bool = False
    hide_theatrical: bool = False
    community_tracking_access_token: Optional[str] = None
    provider_timeout_seconds: float = 30.0
    provider_retry_attempts: int = 2
    retry_wait_seconds: float = 1.0
    max_concurrent_titles: int = 10

    def __post_init__(self) -> None:
        try:
            ZoneInfo(self.viewer_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown viewer timezone: {self.viewer_timezone!r}") from exc

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.viewer_timezone)

    @property
    def community_tracking_enabled(self) -> bool:
        return bool(self.community_tracking_access_token)
