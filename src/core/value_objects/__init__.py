"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages entre taches concurrentes.

Exports :
- ProviderName : Fournisseurs de dates connus
- ReleaseKind : Type de sortie d'un film
- RawDate : Date nue ou horodatage brut d'un fournisseur
- ProviderRecord et ses variantes : Observations normalisees par fournisseur
- TitleProfile / ExternalIds : Description catalogue d'un titre suivi
- ScheduleSettings : Instantane des preferences utilisateur
"""

from src.core.value_objects.provider_record import (
    AnyProviderRecord,
    CatalogRecord,
    CommunityRecord,
    EpisodeAirdateRecord,
    EpisodeDisplay,
    ProviderName,
    ProviderRecord,
    RawDate,
    RegionalReleaseRecord,
    ReleaseKind,
)
from src.core.value_objects.schedule_settings import ScheduleSettings
from src.core.value_objects.title_profile import ExternalIds, TitleProfile

__all__ = [
    "ProviderName",
    "ReleaseKind",
    "RawDate",
    "EpisodeDisplay",
    "ProviderRecord",
    "CatalogRecord",
    "EpisodeAirdateRecord",
    "CommunityRecord",
    "RegionalReleaseRecord",
    "AnyProviderRecord",
    "ExternalIds",
    "TitleProfile",
    "ScheduleSettings",
]
