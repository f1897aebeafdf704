"""
Source de titres suivis sauvegardee en JSON.

Format du fichier (liste directe ou objet {"titles": [...]}):

    {
      "titles": [
        {"id": 1399, "kind": "series", "name": "Game of Thrones",
         "origin_countries": ["US"]},
        {"id": 27205, "kind": "movie", "name": "Inception",
         "custom_poster_path": "/custom.jpg", "date_offset_days": 0}
      ]
    }
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from src.core.entities.tracked_title import MediaKind, TrackedTitle
from src.core.errors import InvalidTitleReference
from src.core.ports.providers import IWatchlistSource

_KIND_ALIASES = {
    "series": MediaKind.SERIES,
    "show": MediaKind.SERIES,
    "tv": MediaKind.SERIES,
    "movie": MediaKind.MOVIE,
    "film": MediaKind.MOVIE,
}


def parse_tracked_title(item: Any) -> TrackedTitle:
    """
    Construit un TrackedTitle depuis une entree JSON.

    Raises:
        InvalidTitleReference: Entree incomplete ou mal typee
    """
    if not isinstance(item, dict):
        raise InvalidTitleReference(None, f"entry is not an object: {item!r}")

    raw_id = item.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, int):
        raise InvalidTitleReference(None, f"missing or non-integer id: {raw_id!r}")

    kind = _KIND_ALIASES.get(str(item.get("kind", "")).lower())
    if kind is None:
        raise InvalidTitleReference(raw_id, f"unknown kind: {item.get('kind')!r}")

    countries = item.get("origin_countries") or []
    if isinstance(countries, str):
        countries = [countries]

    offset = item.get("date_offset_days", 0)
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise InvalidTitleReference(raw_id, f"non-integer date_offset_days: {offset!r}")

    return TrackedTitle(
        id=raw_id,
        media_kind=kind,
        name=str(item.get("name") or ""),
        origin_countries=tuple(str(c).upper() for c in countries),
        custom_poster_path=item.get("custom_poster_path") or None,
        date_offset_days=offset,
    )


class JsonWatchlistSource(IWatchlistSource):
    """
    Watchlist lue depuis un fichier JSON.

    Example:
        source = JsonWatchlistSource(Path("~/.airdates/watchlist.json"))
        titles = source.list_titles()
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()
        self._rejected: list[InvalidTitleReference] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def rejected(self) -> list[InvalidTitleReference]:
        """Entrees ecartees lors de la derniere lecture."""
        return list(self._rejected)

    def list_titles(self) -> list[TrackedTitle]:
        """
        Lit les titres suivis.

        Un fichier absent equivaut a une watchlist vide. Une entree mal
        formee est ignoree et conservee dans `rejected`; les autres titres
        sont lus normalement.

        Raises:
            ValueError: Fichier JSON illisible
        """
        self._rejected = []
        if not self._path.exists():
            logger.debug("Watchlist absente", path=str(self._path))
            return []

        data = json.loads(self._path.read_text(encoding="utf-8"))
        items = data.get("titles", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ValueError(f"Watchlist {self._path} must contain a list of titles")

        titles: list[TrackedTitle] = []
        for index, item in enumerate(items):
            try:
                titles.append(parse_tracked_title(item))
            except InvalidTitleReference as e:
                logger.warning(
                    "Entree de watchlist ignoree",
                    path=str(self._path),
                    index=index,
                    reason=e.reason,
                )
                self._rejected.append(e)

        logger.debug(
            "Watchlist chargee",
            path=str(self._path),
            titles=len(titles),
            rejected=len(self._rejected),
        )
        return titles
