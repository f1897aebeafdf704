"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports fournisseurs :
- IProviderAdapter : Observations de dates d'un fournisseur
- ICatalogAdapter : Catalogue principal (description du titre + dates)

Port watchlist :
- IWatchlistSource : Titres suivis par l'utilisateur (lecture seule)
"""

from src.core.ports.providers import (
    ICatalogAdapter,
    IProviderAdapter,
    IWatchlistSource,
)

__all__ = [
    "IProviderAdapter",
    "ICatalogAdapter",
    "IWatchlistSource",
]
