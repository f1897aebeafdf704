"""
Objets valeur pour les observations brutes des fournisseurs de metadonnees.

Chaque fournisseur (catalogue, dates d'episodes, suivi communautaire, dates
de sortie regionales) produit ses propres variantes de ProviderRecord.
L'union est fermee : le resolveur de dates ne voit jamais le JSON brut,
uniquement ces objets normalises et valides a la frontiere des adaptateurs.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import ClassVar, Optional, Union


class ProviderName(Enum):
    """Fournisseurs de dates connus.

    L'ordre de declaration est l'ordre de rapport des fournisseurs degrades.

    Valeurs:
        COMMUNITY_TRACKING: Suivi communautaire (Trakt), horodatages precis
        EPISODE_AIRDATES: Dates de diffusion par episode (TVMaze)
        CATALOG: Catalogue principal (TMDB)
        REGIONAL_RELEASE: Dates de sortie par pays pour les films (TMDB)
    """

    COMMUNITY_TRACKING = "CommunityTracking"
    EPISODE_AIRDATES = "EpisodeAirdates"
    CATALOG = "Catalog"
    REGIONAL_RELEASE = "RegionalRelease"


class ReleaseKind(Enum):
    """Categorie d'evenement de sortie d'un film."""

    THEATRICAL = "theatrical"
    DIGITAL = "digital"
    PHYSICAL = "physical"
    PREMIERE = "premiere"

    @property
    def is_cinema(self) -> bool:
        """True pour le groupe salle (theatrical, premiere)."""
        return self in (ReleaseKind.THEATRICAL, ReleaseKind.PREMIERE)

    @property
    def normalized(self) -> "ReleaseKind":
        """Ramene le type au groupe affiche : THEATRICAL ou DIGITAL."""
        return ReleaseKind.THEATRICAL if self.is_cinema else ReleaseKind.DIGITAL


@dataclass(frozen=True)
class RawDate:
    """
    Date brute telle que fournie par une API.

    Une date brute est soit une simple date (YYYY-MM-DD, sans heure),
    soit un horodatage precis (instant UTC).

    Attributs:
        day: Date calendaire telle qu'ecrite par le fournisseur
        instant: Instant precis (timezone-aware) si le fournisseur l'a donne
    """

    day: date
    instant: Optional[datetime] = None

    @property
    def has_timestamp(self) -> bool:
        """True si la valeur porte une heure precise."""
        return self.instant is not None

    @classmethod
    def parse(cls, value: str) -> "RawDate":
        """
        Parse une date ISO-8601 fournie par une API.

        Accepte "2024-03-01", "2024-03-01T01:00:00Z" et
        "2024-03-01T01:00:00+00:00". Une date-heure sans fuseau est
        consideree comme UTC.

        Raises:
            ValueError: Si la valeur n'est pas une date ISO valide
        """
        text = value.strip()
        if not text:
            raise ValueError("Empty date value")

        if "T" not in text and " " not in text:
            return cls(day=date.fromisoformat(text[:10]))

        # fromisoformat ne gere "Z" qu'a partir de Python 3.11
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        instant = datetime.fromisoformat(text)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return cls(day=instant.date(), instant=instant)

    @classmethod
    def at_utc(cls, day: date, hour: int, minute: int = 0) -> "RawDate":
        """Construit un horodatage UTC pour un jour et une heure donnes."""
        instant = datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)
        return cls(day=day, instant=instant)

    def __str__(self) -> str:
        if self.instant is not None:
            return self.instant.isoformat()
        return self.day.isoformat()


@dataclass(frozen=True)
class EpisodeDisplay:
    """Champs d'affichage d'un episode, transmis tels quels par le catalogue."""

    name: Optional[str] = None
    overview: Optional[str] = None
    still_path: Optional[str] = None


@dataclass(frozen=True)
class ProviderRecord:
    """
    Observation brute et immutable d'un fournisseur.

    Classe de base de l'union fermee des variantes par fournisseur.
    Ne pas instancier directement : utiliser l'une des sous-classes.

    Attributs:
        title_id: ID catalogue du titre suivi
        raw_date: Date ou horodatage observe
        season_number: Numero de saison (series uniquement)
        episode_number: Numero d'episode (series uniquement)
        release_kind: Type de sortie (films uniquement)
        country_code: Pays ISO 3166-1 de la sortie (films uniquement)
        display: Champs d'affichage de l'episode, si le fournisseur les donne
    """

    provider: ClassVar[ProviderName]

    title_id: int
    raw_date: RawDate
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    release_kind: Optional[ReleaseKind] = None
    country_code: Optional[str] = None
    display: Optional[EpisodeDisplay] = None

    @property
    def has_timestamp(self) -> bool:
        return self.raw_date.has_timestamp

    @property
    def is_special(self) -> bool:
        """True pour les episodes de la saison 0 (specials)."""
        return self.season_number == 0

    @property
    def episode_key(self) -> Optional[tuple[int, int]]:
        """Cle (saison, episode), ou None pour un enregistrement de film."""
        if self.season_number is None or self.episode_number is None:
            return None
        return (self.season_number, self.episode_number)


@dataclass(frozen=True)
class CatalogRecord(ProviderRecord):
    """Date nominale du catalogue (episode, ou date de sortie principale d'un film)."""

    provider: ClassVar[ProviderName] = ProviderName.CATALOG


@dataclass(frozen=True)
class EpisodeAirdateRecord(ProviderRecord):
    """Date ou horodatage de diffusion d'un episode (TVMaze)."""

    provider: ClassVar[ProviderName] = ProviderName.EPISODE_AIRDATES


@dataclass(frozen=True)
class CommunityRecord(ProviderRecord):
    """Date rapportee par le suivi communautaire (Trakt)."""

    provider: ClassVar[ProviderName] = ProviderName.COMMUNITY_TRACKING


@dataclass(frozen=True)
class RegionalReleaseRecord(ProviderRecord):
    """Date de sortie d'un film pour un pays et un type donnes."""

    provider: ClassVar[ProviderName] = ProviderName.REGIONAL_RELEASE


AnyProviderRecord = Union[
    CatalogRecord,
    EpisodeAirdateRecord,
    CommunityRecord,
    RegionalReleaseRecord,
]
