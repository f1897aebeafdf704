"""
Profil d'un titre suivi, tel que decrit par le catalogue.

Le profil est obtenu une fois par titre avant l'interrogation des autres
fournisseurs : il porte la liste des saisons, les diffuseurs et les
identifiants croises necessaires aux adaptateurs secondaires.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.entities.tracked_title import TrackedTitle


@dataclass(frozen=True)
class ExternalIds:
    """Identifiants croises vers d'autres bases (IMDb, TVDB)."""

    imdb_id: Optional[str] = None
    tvdb_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.imdb_id and not self.tvdb_id


@dataclass(frozen=True)
class TitleProfile:
    """
    Description d'un titre suivi, enrichie par le catalogue.

    Attributs:
        title: Titre suivi (lecture seule, fourni par la watchlist)
        season_numbers: Numeros de saison connus, dans l'ordre du catalogue
        networks: Noms des diffuseurs / plateformes associes
        origin_countries: Pays d'origine (codes ISO 3166-1)
        external_ids: Identifiants croises (IMDb, TVDB)
        primary_release_date: Date de sortie principale (films), brute
        poster_path: Chemin du poster cote catalogue
        backdrop_path: Chemin du fond d'ecran cote catalogue
        overview: Resume du titre
    """

    title: TrackedTitle
    season_numbers: tuple[int, ...] = ()
    networks: tuple[str, ...] = ()
    origin_countries: tuple[str, ...] = ()
    external_ids: ExternalIds = ExternalIds()
    primary_release_date: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    overview: Optional[str] = None

    @property
    def title_id(self) -> int:
        return self.title.id

    @property
    def effective_origin_countries(self) -> tuple[str, ...]:
        """Pays d'origine du catalogue, a defaut ceux de la watchlist."""
        return self.origin_countries or self.title.origin_countries

    @property
    def effective_poster_path(self) -> Optional[str]:
        """Le poster personnalise de l'utilisateur prime sur celui du catalogue."""
        return self.title.custom_poster_path or self.poster_path

    @classmethod
    def minimal(cls, title: TrackedTitle) -> "TitleProfile":
        """Profil construit uniquement depuis la watchlist (catalogue indisponible)."""
        return cls(title=title, origin_countries=title.origin_countries)
