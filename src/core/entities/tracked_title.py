"""
Tracked title entity.

A show or movie the user follows in their library. Owned by the watchlist
collaborator; the schedule engine only reads it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaKind(Enum):
    """Kind of tracked media.

    Values:
        SERIES: TV show, resolved per episode
        MOVIE: Movie, resolved per release kind (theatrical, digital)
    """

    SERIES = "series"
    MOVIE = "movie"


@dataclass(frozen=True)
class TrackedTitle:
    """
    A show or movie followed by the user.

    Attributes:
        id: Catalog (TMDB) ID
        media_kind: SERIES or MOVIE
        name: Display name
        origin_countries: Origin country codes (ISO 3166-1), first is primary
        custom_poster_path: User poster override, wins over the catalog poster
        date_offset_days: User override added to every resolved date
    """

    id: int
    media_kind: MediaKind
    name: str = ""
    origin_countries: tuple[str, ...] = ()
    custom_poster_path: Optional[str] = None
    date_offset_days: int = 0

    @property
    def is_movie(self) -> bool:
        return self.media_kind is MediaKind.MOVIE

    @property
    def key(self) -> tuple[int, MediaKind]:
        """Identity of the title across a batch (TMDB ids are per kind)."""
        return (self.id, self.media_kind)
