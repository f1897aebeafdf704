"""
Adaptateurs de fournisseurs de dates.

Chaque adaptateur traduit le JSON brut d'un client HTTP en ProviderRecord
et convertit toute panne en ProviderUnavailable:
- CatalogAdapter: TMDB, description du titre et dates nominales
- EpisodeAirdatesAdapter: TVMaze, dates de diffusion par episode
- CommunityTrackingAdapter: Trakt, horodatages et sorties de films
- RegionalReleaseAdapter: TMDB, sorties de films par pays
"""

from src.adapters.providers.catalog import CatalogAdapter
from src.adapters.providers.community_tracking import CommunityTrackingAdapter
from src.adapters.providers.episode_airdates import EpisodeAirdatesAdapter
from src.adapters.providers.regional_release import RegionalReleaseAdapter

__all__ = [
    "CatalogAdapter",
    "EpisodeAirdatesAdapter",
    "CommunityTrackingAdapter",
    "RegionalReleaseAdapter",
]
