"""Sources de titres suivis."""

from src.adapters.watchlist.json_watchlist import JsonWatchlistSource, parse_tracked_title

__all__ = ["JsonWatchlistSource", "parse_tracked_title"]
