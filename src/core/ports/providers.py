"""
Interfaces ports pour les fournisseurs de dates.

Interfaces abstraites (ports) definissant le contrat des adaptateurs de
fournisseurs. Chaque adaptateur traduit le schema de son fournisseur en
ProviderRecord, sans arithmetique de date ni logique de precedence.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from src.core.entities.tracked_title import MediaKind, TrackedTitle
from src.core.errors import InvalidTitleReference
from src.core.value_objects.provider_record import AnyProviderRecord, ProviderName
from src.core.value_objects.title_profile import TitleProfile


class IProviderAdapter(ABC):
    """
    Interface commune des adaptateurs de fournisseurs.

    fetch() leve ProviderUnavailable en cas d'erreur reseau ou de parsing.
    Quand le fournisseur n'a simplement pas de donnees pour le titre, il
    retourne une liste vide ou leve NoDataFound (titre introuvable chez lui) :
    les deux sont traites de la meme facon, jamais comme une panne.
    """

    #: Types de media pour lesquels l'adaptateur a des donnees
    media_kinds: frozenset[MediaKind] = frozenset({MediaKind.SERIES, MediaKind.MOVIE})

    @property
    @abstractmethod
    def name(self) -> ProviderName:
        """Retourne le fournisseur represente par l'adaptateur."""
        ...

    def supports(self, media_kind: MediaKind) -> bool:
        """Indique si l'adaptateur doit etre interroge pour ce type de media."""
        return media_kind in self.media_kinds

    @abstractmethod
    async def fetch(
        self,
        profile: TitleProfile,
        seasons_of_interest: Sequence[int],
    ) -> list[AnyProviderRecord]:
        """
        Recupere et normalise les observations d'un fournisseur.

        Args:
            profile: Titre suivi et son profil catalogue
            seasons_of_interest: Saisons a couvrir (ignore pour les films)

        Returns:
            Liste des enregistrements normalises (vide si aucune donnee)

        Raises:
            NoDataFound: Titre inconnu du fournisseur
            ProviderUnavailable: Erreur reseau ou reponse inexploitable
        """
        ...


class ICatalogAdapter(IProviderAdapter):
    """
    Adaptateur du catalogue principal.

    En plus des dates, le catalogue decrit le titre (saisons, diffuseurs,
    identifiants croises) avant l'interrogation des autres fournisseurs.
    """

    @abstractmethod
    async def describe(self, title: TrackedTitle) -> TitleProfile:
        """
        Decrit un titre suivi.

        Raises:
            InvalidTitleReference: Le catalogue ne connait pas le titre
            ProviderUnavailable: Erreur reseau ou reponse inexploitable
        """
        ...


class IWatchlistSource(ABC):
    """Source en lecture seule des titres suivis."""

    @abstractmethod
    def list_titles(self) -> list[TrackedTitle]:
        """Retourne les titres suivis; les entrees invalides sont ecartees."""
        ...

    @property
    def rejected(self) -> list[InvalidTitleReference]:
        """Entrees ecartees lors du dernier appel a list_titles."""
        return []
