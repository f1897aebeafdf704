"""
Business entities representing core domain concepts.

Exports:
- TrackedTitle: A show or movie followed by the user
- MediaKind: SERIES or MOVIE
- ResolvedScheduleEntry: One resolved episode or movie release
- DisplayFields: Presentation fields of an entry
- CalendarWindow: Inclusive date window for a query
"""

from src.core.entities.tracked_title import MediaKind, TrackedTitle
from src.core.entities.schedule import (
    CalendarWindow,
    DisplayFields,
    ResolvedScheduleEntry,
)

__all__ = [
    "TrackedTitle",
    "MediaKind",
    "ResolvedScheduleEntry",
    "DisplayFields",
    "CalendarWindow",
]
