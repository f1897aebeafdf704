"""
Agregation multi-fournisseurs du calendrier d'un titre suivi.

ScheduleAggregator decide, pour un titre, quels fournisseurs et quelles
saisons interroger, lance les adaptateurs en parallele, puis confie les
observations recues au DateResolver.

Responsabilites:
- Decrire le titre via le catalogue (saisons, diffuseurs, ids croises)
- Restreindre aux saisons d'interet (deux plus recentes + specials)
- Interroger les adaptateurs en parallele (timeout, une relance)
- Tolerer l'echec d'un fournisseur : avertissement, jamais d'arret
- Abandonner les appels en cours si l'appelant annule la fenetre
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.core.entities.schedule import ResolvedScheduleEntry
from src.core.entities.tracked_title import TrackedTitle
from src.core.errors import InvalidTitleReference, NoDataFound, ProviderUnavailable
from src.core.ports.providers import ICatalogAdapter, IProviderAdapter
from src.core.value_objects.provider_record import AnyProviderRecord, ProviderName
from src.core.value_objects.schedule_settings import ScheduleSettings
from src.core.value_objects.title_profile import TitleProfile
from src.services.date_resolver import DateResolver
from src.utils.constants import RECENT_SEASONS_COUNT, SPECIALS_SEASON

T = TypeVar("T")

CANCELLED_MESSAGE = "cancelled"


@dataclass(frozen=True)
class ProviderWarning:
    """
    Avertissement non bloquant : un fournisseur n'a rien livre pour un titre.

    Attributes:
        provider: Fournisseur degrade
        title_id: Titre concerne
        message: Cause (erreur reseau, timeout, annulation...)
    """

    provider: ProviderName
    title_id: int
    message: str = ""


@dataclass
class TitleSchedule:
    """Resultat de l'agregation d'un titre.

    Attributes:
        title: Titre suivi
        entries: Toutes les entrees resolues (non fenetrees)
        warnings: Fournisseurs degrades pour ce titre
        invalid: Erreur si le titre n'a pas pu etre resolu du tout
    """

    title: TrackedTitle
    entries: list[ResolvedScheduleEntry] = field(default_factory=list)
    warnings: list[ProviderWarning] = field(default_factory=list)
    invalid: Optional[InvalidTitleReference] = None

    @property
    def is_degraded(self) -> bool:
        return bool(self.warnings)


def select_seasons_of_interest(season_numbers: Sequence[int]) -> tuple[int, ...]:
    """
    Saisons a interroger : les deux dernieres saisons + la saison 0.

    Les saisons plus anciennes sont considerees stables. Le resultat est
    trie et ne depend pas de l'ordre d'entree.
    """
    regular = sorted({n for n in season_numbers if n != SPECIALS_SEASON})
    selected = set(regular[-RECENT_SEASONS_COUNT:])
    if SPECIALS_SEASON in season_numbers:
        selected.add(SPECIALS_SEASON)
    return tuple(sorted(selected))


class ScheduleAggregator:
    """
    Orchestrateur par titre des adaptateurs de fournisseurs.

    Sans etat mutable partage : une meme instance peut agreger plusieurs
    titres en parallele.

    Example:
        aggregator = ScheduleAggregator(catalog, [airdates, community], settings)
        schedule = await aggregator.aggregate(title)
        for warning in schedule.warnings:
            print(warning.provider.value, warning.message)
    """

    def __init__(
        self,
        catalog: ICatalogAdapter,
        adapters: Sequence[IProviderAdapter],
        settings: ScheduleSettings,
        resolver: Optional[DateResolver] = None,
    ) -> None:
        """
        Initialise l'agregateur.

        Args:
            catalog: Adaptateur du catalogue (description + dates nominales)
            adapters: Adaptateurs secondaires (dates d'episodes, suivi, sorties)
            settings: Instantane immutable des preferences
            resolver: Resolveur de dates (cree depuis settings si absent)
        """
        self._catalog = catalog
        self._adapters = [a for a in adapters if a is not catalog]
        self._settings = settings
        self._resolver = resolver or DateResolver(settings)

    async def aggregate(
        self,
        title: TrackedTitle,
        cancel: Optional[asyncio.Event] = None,
    ) -> TitleSchedule:
        """
        Agrege le calendrier complet d'un titre.

        Args:
            title: Titre suivi
            cancel: Evenement d'annulation; une fois positionne, les appels
                    en cours sont abandonnes et le titre est resolu avec
                    les donnees deja recues

        Returns:
            TitleSchedule avec toutes les entrees des saisons interrogees
        """
        schedule = TitleSchedule(title=title)
        if cancel is not None and cancel.is_set():
            self._record_failure(schedule, self._catalog.name, CANCELLED_MESSAGE)
            return schedule

        try:
            profile = await self._describe(title, schedule, cancel)
        except InvalidTitleReference as exc:
            logger.warning("Titre ignore", title_id=title.id, reason=exc.reason)
            schedule.invalid = exc
            return schedule

        adapters: list[IProviderAdapter] = []
        if profile is None:
            profile = TitleProfile.minimal(title)
        else:
            adapters.append(self._catalog)
        adapters.extend(a for a in self._adapters if a.supports(title.media_kind))

        seasons = () if title.is_movie else select_seasons_of_interest(profile.season_numbers)

        records = await self._collect(profile, seasons, adapters, schedule, cancel)
        schedule.entries = self._resolver.resolve_title(profile, records)

        logger.debug(
            "Titre agrege",
            title_id=title.id,
            seasons=list(seasons),
            records=len(records),
            entries=len(schedule.entries),
        )
        return schedule

    async def _describe(
        self,
        title: TrackedTitle,
        schedule: TitleSchedule,
        cancel: Optional[asyncio.Event] = None,
    ) -> Optional[TitleProfile]:
        """Profil catalogue, ou None si le catalogue est indisponible ou l'appel annule."""
        if title.id <= 0:
            raise InvalidTitleReference(title.id, "non-positive catalog id")
        task = asyncio.create_task(
            self._call(self._catalog.name, lambda: self._catalog.describe(title))
        )
        if not await _await_or_cancel(task, cancel):
            self._record_failure(schedule, self._catalog.name, CANCELLED_MESSAGE)
            return None
        try:
            return task.result()
        except ProviderUnavailable as exc:
            self._record_failure(schedule, exc.provider, exc.reason or str(exc))
            return None

    async def _collect(
        self,
        profile: TitleProfile,
        seasons: tuple[int, ...],
        adapters: Sequence[IProviderAdapter],
        schedule: TitleSchedule,
        cancel: Optional[asyncio.Event],
    ) -> list[AnyProviderRecord]:
        """Lance les adaptateurs en parallele et joint leurs observations."""
        if not adapters:
            return []
        if cancel is not None and cancel.is_set():
            for adapter in adapters:
                self._record_failure(schedule, adapter.name, CANCELLED_MESSAGE)
            return []

        tasks = {
            asyncio.create_task(self._fetch(adapter, profile, seasons)): adapter.name
            for adapter in adapters
        }
        pending = set(tasks)
        cancel_waiter = asyncio.create_task(cancel.wait()) if cancel is not None else None

        try:
            while pending:
                waitables = set(pending)
                if cancel_waiter is not None:
                    waitables.add(cancel_waiter)
                done, _ = await asyncio.wait(waitables, return_when=asyncio.FIRST_COMPLETED)
                pending -= done
                if cancel_waiter is not None and cancel_waiter in done:
                    break
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        records: list[AnyProviderRecord] = []
        for task, provider in tasks.items():
            if task in pending:
                self._record_failure(schedule, provider, CANCELLED_MESSAGE)
                continue
            outcome = task.result()
            if isinstance(outcome, ProviderUnavailable):
                self._record_failure(schedule, provider, outcome.reason or str(outcome))
            else:
                records.extend(outcome)
        return records

    async def _fetch(
        self,
        adapter: IProviderAdapter,
        profile: TitleProfile,
        seasons: tuple[int, ...],
    ) -> list[AnyProviderRecord] | ProviderUnavailable:
        """Appel d'un adaptateur; l'echec est retourne, pas leve."""
        try:
            return await self._call(adapter.name, lambda: adapter.fetch(profile, seasons))
        except NoDataFound as exc:
            logger.debug(
                "Aucune donnee",
                provider=adapter.name.value,
                title_id=profile.title_id,
                reason=str(exc),
            )
            return []
        except ProviderUnavailable as exc:
            return exc

    async def _call(
        self,
        provider: ProviderName,
        factory: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Execute un appel de fournisseur avec timeout et une relance.

        Raises:
            ProviderUnavailable: Apres epuisement des tentatives
        """
        settings = self._settings
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(ProviderUnavailable),
            stop=stop_after_attempt(max(1, settings.provider_retry_attempts)),
            wait=wait_fixed(settings.retry_wait_seconds),
            before_sleep=_log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                try:
                    return await asyncio.wait_for(
                        factory(), timeout=settings.provider_timeout_seconds
                    )
                except asyncio.TimeoutError as exc:
                    raise ProviderUnavailable(provider, "timeout") from exc
        raise ProviderUnavailable(provider, "no attempt made")

    @staticmethod
    def _record_failure(
        schedule: TitleSchedule,
        provider: ProviderName,
        message: str,
    ) -> None:
        logger.warning(
            "Fournisseur indisponible, precision degradee",
            provider=provider.value,
            title_id=schedule.title.id,
            reason=message,
        )
        schedule.warnings.append(
            ProviderWarning(provider=provider, title_id=schedule.title.id, message=message)
        )


async def _await_or_cancel(task: asyncio.Task, cancel: Optional[asyncio.Event]) -> bool:
    """
    Attend la fin de `task` ou le positionnement de `cancel`.

    Si l'annulation l'emporte, la tache est annulee et attendue.

    Returns:
        True si la tache s'est terminee d'elle-meme
    """
    cancel_waiter = asyncio.create_task(cancel.wait()) if cancel is not None else None
    try:
        waitables = {task} if cancel_waiter is None else {task, cancel_waiter}
        await asyncio.wait(waitables, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if cancel_waiter is not None:
            cancel_waiter.cancel()
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
    return not task.cancelled()


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.debug(
        "Relance d'un appel fournisseur",
        attempt=retry_state.attempt_number,
        error=str(exc),
    )
