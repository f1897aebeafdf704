"""
Taxonomie des erreurs du moteur de calendrier.

- ProviderUnavailable : echec reseau ou de parsing d'un fournisseur (soft)
- NoDataFound : titre introuvable chez un fournisseur, etat valide (jamais une panne)
- InvalidTitleReference : titre que le moteur ne sait pas resoudre
"""

from typing import Optional

from src.core.value_objects.provider_record import ProviderName


class ProviderUnavailable(Exception):
    """
    Exception levee quand un fournisseur ne peut pas repondre.

    Attributes:
        provider: Fournisseur en echec
        reason: Description courte de la cause
    """

    def __init__(self, provider: ProviderName, reason: str = "") -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider.value} unavailable: {reason}" if reason else f"{provider.value} unavailable")


class NoDataFound(Exception):
    """Aucune donnee pour un episode ou un titre (etat valide, pas une erreur)."""


class InvalidTitleReference(Exception):
    """
    Exception levee pour un titre que le moteur ne peut pas resoudre.

    Attributes:
        title_id: ID du titre fautif, si connu
    """

    def __init__(self, title_id: Optional[int], reason: str = "") -> None:
        self.title_id = title_id
        self.reason = reason
        super().__init__(f"Invalid title reference {title_id}: {reason}")
