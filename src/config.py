"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe AIRDATES_,
et peut optionnellement être fournie via un fichier .env.

Les clés API (TMDB, Trakt) sont optionnelles - les fournisseurs correspondants sont
désactivés si non fournies.
"""

from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.value_objects.schedule_settings import ScheduleSettings
from src.services.region_heuristics import infer_viewer_region, resolve_viewer_timezone

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe AIRDATES_.
    Exemple : AIRDATES_VIEWER_REGION=GB

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="AIRDATES_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Clés API (OPTIONNELLES - fournisseurs désactivés si non définies)
    tmdb_api_key: Optional[str] = Field(default=None)
    trakt_client_id: Optional[str] = Field(default=None)
    trakt_access_token: Optional[str] = Field(default=None)

    # Région et fuseau du spectateur (déduits de la locale si non définis)
    viewer_region: Optional[str] = Field(default=None)
    viewer_timezone: Optional[str] = Field(default=None)

    # Préférences d'affichage
    time_shift_enabled: bool = Field(default=False)
    ignore_specials: bool = Field(default=False)
    hide_theatrical: bool = Field(default=False)

    # Appels fournisseurs
    provider_timeout_seconds: float = Field(default=30.0, gt=0)
    provider_retry_attempts: int = Field(default=2, ge=1, le=2)
    max_concurrent_titles: int = Field(default=10, ge=1)

    # Cache des réponses brutes
    cache_enabled: bool = Field(default=True)
    cache_dir: Path = Field(default=Path("~/.airdates/cache"))

    # Titres suivis
    watchlist_file: Path = Field(default=Path("~/.airdates/watchlist.json"))

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/airdates.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "watchlist_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("viewer_region", mode="before")
    @classmethod
    def normalize_region(cls, v: Optional[str]) -> Optional[str]:
        """Code pays en majuscules; chaîne vide = non défini."""
        if v is None or not str(v).strip():
            return None
        return str(v).strip().upper()

    @field_validator("viewer_timezone", mode="before")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Nom IANA reconnu par zoneinfo; chaîne vide = non défini."""
        if v is None or not str(v).strip():
            return None
        name = str(v).strip()
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Fuseau horaire inconnu : {name}") from e
        return name

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return self.tmdb_api_key is not None

    @property
    def trakt_enabled(self) -> bool:
        """Vérifie si l'API Trakt est configurée (client ID + jeton utilisateur)."""
        return self.trakt_client_id is not None and self.trakt_access_token is not None

    def snapshot(self, locale_tag: Optional[str] = None) -> ScheduleSettings:
        """Capture un instantané immutable des préférences pour une résolution.

        Args :
            locale_tag : Locale du système (ex: "fr_FR.UTF-8"), utilisée si
                         viewer_region n'est pas défini

        Returns :
            ScheduleSettings partagé en lecture seule par toutes les tâches
        """
        region = infer_viewer_region(self.viewer_region, locale_tag)
        return ScheduleSettings(
            viewer_region=region,
            viewer_timezone=resolve_viewer_timezone(region, self.viewer_timezone),
            time_shift_enabled=self.time_shift_enabled,
            ignore_specials=self.ignore_specials,
            hide_theatrical=self.hide_theatrical,
            community_tracking_access_token=(
                self.trakt_access_token if self.trakt_enabled else None
            ),
            provider_timeout_seconds=self.provider_timeout_seconds,
            provider_retry_attempts=self.provider_retry_attempts,
            max_concurrent_titles=self.max_concurrent_titles,
        )
