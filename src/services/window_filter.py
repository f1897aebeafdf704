"""
Filtrage des entrees resolues pour l'affichage.

- filter_window : conserve les entrees dont la date tombe dans la fenetre
- apply_display_preferences : masque specials et sorties salle selon
  les preferences de l'utilisateur

Fonctions pures, appliquees en dernier, independamment de la facon dont
les entrees ont ete produites.
"""

from typing import Iterable

from src.core.entities.schedule import CalendarWindow, ResolvedScheduleEntry
from src.core.value_objects.provider_record import ReleaseKind
from src.core.value_objects.schedule_settings import ScheduleSettings


def filter_window(
    entries: Iterable[ResolvedScheduleEntry],
    window: CalendarWindow,
) -> list[ResolvedScheduleEntry]:
    """Entrees dont canonical_date est dans [window.start, window.end]."""
    return [entry for entry in entries if window.contains(entry.canonical_date)]


def apply_display_preferences(
    entries: Iterable[ResolvedScheduleEntry],
    settings: ScheduleSettings,
) -> list[ResolvedScheduleEntry]:
    """Retire les specials (ignore_specials) et les sorties salle (hide_theatrical)."""
    kept = []
    for entry in entries:
        if settings.ignore_specials and entry.is_special:
            continue
        if (
            settings.hide_theatrical
            and entry.is_movie
            and entry.release_kind is ReleaseKind.THEATRICAL
        ):
            continue
        kept.append(entry)
    return kept
