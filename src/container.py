"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : clients HTTP
des fournisseurs, adaptateurs et service de calendrier.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import create_api_cache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.api.trakt_client import TraktClient
from .adapters.api.tvmaze_client import TVMazeClient
from .adapters.providers.catalog import CatalogAdapter
from .adapters.providers.community_tracking import CommunityTrackingAdapter
from .adapters.providers.episode_airdates import EpisodeAirdatesAdapter
from .adapters.providers.regional_release import RegionalReleaseAdapter
from .adapters.watchlist.json_watchlist import JsonWatchlistSource
from .config import Settings
from .services.schedule_service import ScheduleService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.schedule_service()
        titles = container.watchlist_source().list_titles()
        settings = container.config().snapshot()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache API - Singleton pour partage entre clients (NullCache si desactive)
    api_cache = providers.Singleton(
        create_api_cache,
        enabled=config.provided.cache_enabled,
        cache_dir=config.provided.cache_dir,
    )

    # Clients API - Singleton (un pool de connexions par fournisseur)
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
    )

    tvmaze_client = providers.Singleton(
        TVMazeClient,
        cache=api_cache,
    )

    trakt_client = providers.Singleton(
        TraktClient,
        client_id=config.provided.trakt_client_id,
        cache=api_cache,
    )

    # Adaptateurs de fournisseurs (sans etat - Singletons)
    catalog_adapter = providers.Singleton(CatalogAdapter, client=tmdb_client)
    episode_airdates_adapter = providers.Singleton(EpisodeAirdatesAdapter, client=tvmaze_client)
    regional_release_adapter = providers.Singleton(RegionalReleaseAdapter, client=tmdb_client)

    # Suivi communautaire - Factory car le jeton vient de chaque instantane
    # Utiliser: container.community_tracking_adapter(access_token="...")
    community_tracking_adapter = providers.Factory(
        CommunityTrackingAdapter,
        client=trakt_client,
    )

    # Watchlist - Factory pour relire le fichier a chaque commande
    watchlist_source = providers.Factory(
        JsonWatchlistSource,
        path=config.provided.watchlist_file,
    )

    # Service de calendrier - Factory, les adaptateurs sont partages
    schedule_service = providers.Factory(
        ScheduleService,
        catalog=catalog_adapter,
        adapters=providers.List(episode_airdates_adapter, regional_release_adapter),
        community_adapter_factory=community_tracking_adapter.provider,
        clients=providers.List(tmdb_client, tvmaze_client, trakt_client),
    )
