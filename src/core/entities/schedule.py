"""
Schedule entities.

Resolved schedule entries and the calendar window they are filtered with.
Both are ephemeral: recomputed per query, never persisted by the engine.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from src.core.entities.tracked_title import MediaKind
from src.core.value_objects.provider_record import ProviderName, ReleaseKind


@dataclass(frozen=True)
class DisplayFields:
    """
    Presentation fields passed through from title/episode metadata.

    Attributes:
        name: Episode name (series) or movie title
        show_name: Name of the tracked title
        overview: Episode or title overview
        poster_path: Poster to display (user override first)
        still_path: Episode still, or movie backdrop
        backdrop_path: Title backdrop
    """

    name: str = ""
    show_name: str = ""
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    still_path: Optional[str] = None
    backdrop_path: Optional[str] = None


@dataclass(frozen=True)
class ResolvedScheduleEntry:
    """
    Canonical output unit: one episode, or one release event of a movie.

    Attributes:
        title_id: Catalog ID of the tracked title
        media_kind: SERIES or MOVIE
        season_number: Season (0 for movies)
        episode_number: Episode (1 for movies)
        canonical_date: Local day the viewer experiences the airing/release
        source_provider: Provider whose record was chosen
        release_kind: THEATRICAL or DIGITAL for movies, None for episodes
        display: Presentation fields
        source_value: Raw value the date was derived from (ISO string)
        country_code: Release country for movies, when known
    """

    title_id: int
    media_kind: MediaKind
    season_number: int
    episode_number: int
    canonical_date: date
    source_provider: ProviderName
    release_kind: Optional[ReleaseKind] = None
    display: DisplayFields = field(default_factory=DisplayFields)
    source_value: str = ""
    country_code: Optional[str] = None

    @property
    def identity(self) -> tuple[int, int, int, Optional[ReleaseKind]]:
        """Unique key: at most one entry per tuple is ever emitted."""
        return (self.title_id, self.season_number, self.episode_number, self.release_kind)

    @property
    def is_movie(self) -> bool:
        return self.media_kind is MediaKind.MOVIE

    @property
    def is_special(self) -> bool:
        return not self.is_movie and self.season_number == 0

    @property
    def sort_key(self) -> tuple:
        kind = self.release_kind.value if self.release_kind else ""
        return (
            self.canonical_date,
            self.title_id,
            self.media_kind.value,
            self.season_number,
            self.episode_number,
            kind,
        )


def _add_months(day: date, months: int) -> date:
    """Decale d'un nombre de mois en bornant au dernier jour du mois."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


@dataclass(frozen=True)
class CalendarWindow:
    """
    Inclusive date window supplied by the caller.

    Attributes:
        start: First day included
        end: Last day included
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @classmethod
    def around(cls, day: date, months: int = 1) -> "CalendarWindow":
        """Window spanning `months` months before and after `day`."""
        return cls(start=_add_months(day, -months), end=_add_months(day, months))
