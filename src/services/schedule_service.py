"""
Point d'entree unique du moteur de calendrier.

resolve_schedule() resout un lot de titres suivis pour une fenetre de
dates : une tache par titre, executees en parallele, resultats fusionnes
par identifiant (jamais par ordre d'arrivee), puis fenetres et tries.

ScheduleService porte les adaptateurs injectes par le container et les
complete selon chaque instantane de preferences (CLI, vues calendrier).
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from loguru import logger

from src.core.entities.schedule import CalendarWindow, ResolvedScheduleEntry
from src.core.entities.tracked_title import TrackedTitle
from src.core.ports.providers import ICatalogAdapter, IProviderAdapter
from src.core.value_objects.provider_record import ProviderName
from src.core.value_objects.schedule_settings import ScheduleSettings
from src.services.date_resolver import DateResolver
from src.services.schedule_aggregator import (
    ProviderWarning,
    ScheduleAggregator,
    TitleSchedule,
)
from src.services.window_filter import apply_display_preferences, filter_window


@dataclass(frozen=True)
class ScheduleResult:
    """
    Resultat best-effort d'une resolution de calendrier.

    Attributes:
        entries: Entrees dans la fenetre, triees par date puis titre
        partial_failures: Fournisseurs degrades pour au moins un titre
        invalid_titles: IDs des titres ignores (reference invalide)
        warnings: Detail des avertissements par titre et fournisseur
    """

    entries: tuple[ResolvedScheduleEntry, ...] = ()
    partial_failures: tuple[ProviderName, ...] = ()
    invalid_titles: tuple[int, ...] = ()
    warnings: tuple[ProviderWarning, ...] = ()

    @property
    def is_degraded(self) -> bool:
        return bool(self.partial_failures)


def _unique_titles(titles: Iterable[TrackedTitle]) -> list[TrackedTitle]:
    unique: dict[tuple, TrackedTitle] = {}
    for title in titles:
        unique.setdefault(title.key, title)
    return list(unique.values())


async def resolve_schedule(
    titles: Sequence[TrackedTitle],
    window: CalendarWindow,
    settings: ScheduleSettings,
    catalog: ICatalogAdapter,
    adapters: Sequence[IProviderAdapter] = (),
    cancel: Optional[asyncio.Event] = None,
) -> ScheduleResult:
    """
    Resout le calendrier d'un lot de titres pour une fenetre.

    Ne leve jamais a cause d'un sous-ensemble de fournisseurs ou de titres
    en echec : retourne les entrees disponibles et la liste des
    fournisseurs degrades.

    Args:
        titles: Titres suivis (lecture seule)
        window: Fenetre inclusive fournie par l'appelant
        settings: Instantane immutable des preferences
        catalog: Adaptateur du catalogue principal
        adapters: Adaptateurs secondaires a interroger
        cancel: Evenement d'annulation cooperative

    Returns:
        ScheduleResult fenetre, filtre et trie
    """
    unique_titles = _unique_titles(titles)
    aggregator = ScheduleAggregator(catalog, adapters, settings, DateResolver(settings))
    semaphore = asyncio.Semaphore(max(1, settings.max_concurrent_titles))

    async def run(title: TrackedTitle) -> TitleSchedule:
        async with semaphore:
            return await aggregator.aggregate(title, cancel=cancel)

    logger.info(
        "Resolution du calendrier",
        titles=len(unique_titles),
        start=window.start.isoformat(),
        end=window.end.isoformat(),
        region=settings.viewer_region,
    )
    schedules = await asyncio.gather(*(run(title) for title in unique_titles))

    merged: dict[tuple, ResolvedScheduleEntry] = {}
    warnings: list[ProviderWarning] = []
    invalid_titles: list[int] = []
    for schedule in schedules:
        if schedule.invalid is not None:
            invalid_titles.append(schedule.title.id)
            continue
        warnings.extend(schedule.warnings)
        for entry in schedule.entries:
            merged.setdefault((entry.media_kind, entry.identity), entry)

    entries = apply_display_preferences(filter_window(merged.values(), window), settings)
    entries.sort(key=lambda e: e.sort_key)

    failed = {w.provider for w in warnings}
    partial_failures = tuple(p for p in ProviderName if p in failed)

    if partial_failures:
        logger.warning(
            "Calendrier partiel",
            degraded=[p.value for p in partial_failures],
            entries=len(entries),
        )

    return ScheduleResult(
        entries=tuple(entries),
        partial_failures=partial_failures,
        invalid_titles=tuple(sorted(invalid_titles)),
        warnings=tuple(warnings),
    )


class ScheduleService:
    """
    Service applicatif de resolution du calendrier.

    Recoit les adaptateurs construits par le container. L'adaptateur de
    suivi communautaire est cree a chaque resolution depuis le jeton de
    l'instantane, jamais depuis un etat global.

    Example:
        service = container.schedule_service()
        result = await service.resolve_schedule(titles, window, settings)
        for entry in result.entries:
            print(entry.canonical_date, entry.display.show_name)
    """

    def __init__(
        self,
        catalog: ICatalogAdapter,
        adapters: Sequence[IProviderAdapter] = (),
        community_adapter_factory: Optional[Callable[..., IProviderAdapter]] = None,
        clients: Sequence = (),
    ) -> None:
        """
        Initialise le service.

        Args:
            catalog: Adaptateur du catalogue principal
            adapters: Adaptateurs secondaires toujours interroges
            community_adapter_factory: Fabrique prenant access_token=...
                                       (None = suivi communautaire desactive)
            clients: Clients HTTP a fermer avec le service
        """
        self._catalog = catalog
        self._adapters = list(adapters)
        self._community_adapter_factory = community_adapter_factory
        self._clients = list(clients)

    def adapters_for(self, settings: ScheduleSettings) -> list[IProviderAdapter]:
        """Adaptateurs pour un instantane : Trakt seulement si un jeton est present."""
        adapters = list(self._adapters)
        if self._community_adapter_factory is not None and settings.community_tracking_enabled:
            adapters.append(
                self._community_adapter_factory(
                    access_token=settings.community_tracking_access_token
                )
            )
        return adapters

    async def resolve_schedule(
        self,
        titles: Sequence[TrackedTitle],
        window: CalendarWindow,
        settings: ScheduleSettings,
        cancel: Optional[asyncio.Event] = None,
    ) -> ScheduleResult:
        """Resout le calendrier avec les adaptateurs de l'instantane."""
        return await resolve_schedule(
            titles,
            window,
            settings,
            catalog=self._catalog,
            adapters=self.adapters_for(settings),
            cancel=cancel,
        )

    async def close(self) -> None:
        """Ferme les clients HTTP."""
        for client in self._clients:
            await client.close()
