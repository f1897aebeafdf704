"""
Resolution de la date canonique d'un episode ou d'une sortie de film.

DateResolver recoit, pour un titre, l'ensemble des ProviderRecord deja
recuperes et choisit pour chaque episode (ou chaque groupe de sortie d'un
film) l'observation qui fait foi, selon des tables de precedence explicites.

Responsabilites:
- Appliquer la precedence des fournisseurs (episodes et films)
- Injecter l'heure de sortie mondiale (08:00 UTC) sur les dates nues
  des plateformes de streaming mondiales
- Convertir un horodatage en jour local du spectateur
- Appliquer le decalage d'un jour (origine Ameriques, spectateur a l'Est)
- Dedoublonner : au plus une entree par (titre, saison, episode, type)

Le resolveur est synchrone et pur : aucune E/S, aucun etat partage.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from itertools import groupby
from typing import Iterable, Optional, Sequence

from loguru import logger

from src.core.entities.schedule import DisplayFields, ResolvedScheduleEntry
from src.core.entities.tracked_title import MediaKind
from src.core.value_objects.provider_record import (
    AnyProviderRecord,
    ProviderName,
    RawDate,
    ReleaseKind,
)
from src.core.value_objects.schedule_settings import ScheduleSettings
from src.core.value_objects.title_profile import TitleProfile
from src.services.region_heuristics import (
    is_global_simultaneous_releaser,
    shift_days,
)
from src.utils.constants import GLOBAL_RELEASE_HOUR_UTC


@dataclass(frozen=True)
class PrecedenceRule:
    """
    Une ligne de la table de precedence des episodes.

    Attributes:
        provider: Fournisseur concerne
        timestamp: True = horodatages seulement, False = dates nues seulement,
                   None = les deux
        injects_release_time: Applique l'injection 08:00 UTC aux dates nues
                              des plateformes mondiales
    """

    provider: ProviderName
    timestamp: Optional[bool] = None
    injects_release_time: bool = False

    def matches(self, record: AnyProviderRecord) -> bool:
        if record.provider is not self.provider:
            return False
        return self.timestamp is None or record.has_timestamp == self.timestamp


# Premiere regle satisfaite = source retenue
EPISODE_PRECEDENCE: tuple[PrecedenceRule, ...] = (
    PrecedenceRule(ProviderName.COMMUNITY_TRACKING, timestamp=True),
    PrecedenceRule(ProviderName.EPISODE_AIRDATES, injects_release_time=True),
    PrecedenceRule(ProviderName.CATALOG, injects_release_time=True),
    PrecedenceRule(ProviderName.COMMUNITY_TRACKING, timestamp=False),
)

# Departage des films a date egale
MOVIE_PROVIDER_PRECEDENCE: tuple[ProviderName, ...] = (
    ProviderName.COMMUNITY_TRACKING,
    ProviderName.REGIONAL_RELEASE,
    ProviderName.CATALOG,
)

# Types affiches pour un film, dans l'ordre des entrees (voir ReleaseKind.normalized)
MOVIE_DISPLAY_KINDS: tuple[ReleaseKind, ...] = (ReleaseKind.THEATRICAL, ReleaseKind.DIGITAL)

MOVIE_SEASON_NUMBER = 0
MOVIE_EPISODE_NUMBER = 1


def to_local_day(raw_date: RawDate, settings: ScheduleSettings) -> date:
    """Jour calendaire du spectateur pour une date brute."""
    if raw_date.instant is not None:
        return raw_date.instant.astimezone(settings.tzinfo).date()
    # Une date nue est deja un jour local
    return raw_date.day


def inject_release_time(raw_date: RawDate) -> RawDate:
    """Transforme une date nue D en horodatage D 08:00:00Z."""
    if raw_date.has_timestamp:
        return raw_date
    return RawDate.at_utc(raw_date.day, GLOBAL_RELEASE_HOUR_UTC)


def _movie_provider_rank(provider: ProviderName) -> int:
    try:
        return MOVIE_PROVIDER_PRECEDENCE.index(provider)
    except ValueError:
        return len(MOVIE_PROVIDER_PRECEDENCE)


class DateResolver:
    """
    Resolveur de dates canoniques.

    Construit avec un instantane immutable des preferences, il peut etre
    partage entre taches concurrentes.

    Example:
        resolver = DateResolver(settings)
        entries = resolver.resolve_title(profile, records)
    """

    def __init__(self, settings: ScheduleSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> ScheduleSettings:
        return self._settings

    def resolve_title(
        self,
        profile: TitleProfile,
        records: Iterable[AnyProviderRecord],
    ) -> list[ResolvedScheduleEntry]:
        """
        Resout toutes les entrees d'un titre.

        Args:
            profile: Titre suivi et son profil catalogue
            records: Observations de tous les fournisseurs pour ce titre

        Returns:
            Entrees resolues (une par episode date, une ou deux par film)
        """
        records = [r for r in records if r.title_id == profile.title_id]

        if profile.title.is_movie:
            return self.resolve_movie(profile, records)

        episode_records = sorted(
            (r for r in records if r.episode_key is not None),
            key=lambda r: r.episode_key,
        )
        entries = []
        for _, group in groupby(episode_records, key=lambda r: r.episode_key):
            entry = self.resolve_episode(profile, list(group))
            if entry is not None:
                entries.append(entry)
        return entries

    def resolve_episode(
        self,
        profile: TitleProfile,
        records: Sequence[AnyProviderRecord],
    ) -> Optional[ResolvedScheduleEntry]:
        """
        Choisit la date d'un episode selon EPISODE_PRECEDENCE.

        Returns:
            L'entree resolue, ou None si aucun fournisseur n'a de date
        """
        chosen: Optional[AnyProviderRecord] = None
        chosen_rule: Optional[PrecedenceRule] = None
        for rule in EPISODE_PRECEDENCE:
            candidates = [r for r in records if rule.matches(r)]
            if candidates:
                # Plusieurs observations d'un meme fournisseur : la plus precise, puis la plus tot
                chosen = min(candidates, key=lambda r: (not r.has_timestamp, str(r.raw_date)))
                chosen_rule = rule
                break

        if chosen is None or chosen_rule is None:
            return None

        effective = chosen.raw_date
        if chosen_rule.injects_release_time and is_global_simultaneous_releaser(profile.networks):
            effective = inject_release_time(effective)

        canonical = self._local_day(profile, effective)
        season_number, episode_number = chosen.episode_key

        logger.debug(
            "Episode resolu",
            title_id=profile.title_id,
            season=season_number,
            episode=episode_number,
            provider=chosen.provider.value,
            date=canonical.isoformat(),
        )

        return ResolvedScheduleEntry(
            title_id=profile.title_id,
            media_kind=MediaKind.SERIES,
            season_number=season_number,
            episode_number=episode_number,
            canonical_date=canonical,
            source_provider=chosen.provider,
            display=self._episode_display(profile, records, episode_number),
            source_value=str(effective),
        )

    def resolve_movie(
        self,
        profile: TitleProfile,
        records: Sequence[AnyProviderRecord],
    ) -> list[ResolvedScheduleEntry]:
        """
        Resout les sorties d'un film : au plus une salle et une numerique.

        Les dates par pays (sorties regionales, suivi communautaire) sont
        reparties en deux groupes. Dans chaque groupe, la date du pays du
        spectateur prime; a defaut la plus precoce. Sans aucune date par
        pays, la date principale du catalogue est utilisee comme sortie salle.
        """
        release_records = [
            r for r in records
            if r.provider is not ProviderName.CATALOG and r.release_kind is not None
        ]

        entries = []
        for bucket_kind in MOVIE_DISPLAY_KINDS:
            candidates = [r for r in release_records if r.release_kind.normalized is bucket_kind]
            chosen = self._pick_release(candidates)
            if chosen is not None:
                entries.append(self._movie_entry(profile, chosen, bucket_kind))

        if entries:
            return entries

        catalog_records = [r for r in records if r.provider is ProviderName.CATALOG]
        chosen = self._pick_release(catalog_records)
        if chosen is None:
            return []
        return [self._movie_entry(profile, chosen, ReleaseKind.THEATRICAL)]

    def _pick_release(
        self,
        candidates: Sequence[AnyProviderRecord],
    ) -> Optional[AnyProviderRecord]:
        """Pays du spectateur d'abord, puis date la plus precoce, puis precedence."""
        if not candidates:
            return None
        region = self._settings.viewer_region
        ordered = sorted(
            candidates,
            key=lambda r: (
                r.country_code != region,
                r.raw_date.day,
                _movie_provider_rank(r.provider),
                r.country_code or "",
                r.release_kind.value if r.release_kind else "",
            ),
        )
        return collapse_duplicates(ordered)[0]

    def _movie_entry(
        self,
        profile: TitleProfile,
        record: AnyProviderRecord,
        release_kind: ReleaseKind,
    ) -> ResolvedScheduleEntry:
        # Une date localisee pour le pays du spectateur est deja sur son calendrier
        local_release = record.country_code == self._settings.viewer_region
        canonical = self._local_day(profile, record.raw_date, allow_shift=not local_release)
        title = profile.title
        return ResolvedScheduleEntry(
            title_id=title.id,
            media_kind=MediaKind.MOVIE,
            season_number=MOVIE_SEASON_NUMBER,
            episode_number=MOVIE_EPISODE_NUMBER,
            canonical_date=canonical,
            source_provider=record.provider,
            release_kind=release_kind,
            display=DisplayFields(
                name=title.name,
                show_name=title.name,
                overview=profile.overview,
                poster_path=profile.effective_poster_path,
                still_path=profile.backdrop_path,
                backdrop_path=profile.backdrop_path,
            ),
            source_value=str(record.raw_date),
            country_code=record.country_code,
        )

    def _local_day(
        self,
        profile: TitleProfile,
        raw_date: RawDate,
        allow_shift: bool = True,
    ) -> date:
        settings = self._settings
        day = to_local_day(raw_date, settings)
        if allow_shift:
            day += timedelta(days=shift_days(
                raw_date,
                profile.effective_origin_countries,
                settings.viewer_region,
                enabled=settings.time_shift_enabled,
            ))
        if profile.title.date_offset_days:
            day += timedelta(days=profile.title.date_offset_days)
        return day

    @staticmethod
    def _episode_display(
        profile: TitleProfile,
        records: Sequence[AnyProviderRecord],
        episode_number: int,
    ) -> DisplayFields:
        # Le catalogue porte les metadonnees d'episode les plus completes
        ranked = sorted(
            (r for r in records if r.display is not None),
            key=lambda r: r.provider is not ProviderName.CATALOG,
        )
        episode = ranked[0].display if ranked else None
        title = profile.title
        return DisplayFields(
            name=(episode.name if episode and episode.name else f"Episode {episode_number}"),
            show_name=title.name,
            overview=(episode.overview if episode and episode.overview else profile.overview),
            poster_path=profile.effective_poster_path,
            still_path=episode.still_path if episode else None,
            backdrop_path=profile.backdrop_path,
        )


def collapse_duplicates(
    records: Sequence[AnyProviderRecord],
) -> list[AnyProviderRecord]:
    """
    Fusionne les observations partageant (date, type de sortie).

    Un fournisseur qui repete le meme fait n'est pas un second evenement.
    L'ordre d'entree est conserve : la premiere occurrence l'emporte.
    """
    seen: set[tuple[date, Optional[ReleaseKind]]] = set()
    unique = []
    for record in records:
        key = (record.raw_date.day, record.release_kind)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique
