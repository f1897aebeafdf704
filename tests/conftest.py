"""
Fixtures pytest partagees pour les tests airdates.

Ce module contient les fixtures communes utilisees dans les tests:
- Titres suivis (serie americaine, serie Netflix, film)
- Profils catalogue correspondants
- Instantanes de preferences (spectateur US, spectateur GB)
- Settings de test avec chemins temporaires
"""

import pytest

from src.config import Settings
from src.core.entities.tracked_title import MediaKind, TrackedTitle
from src.core.value_objects.schedule_settings import ScheduleSettings
from src.core.value_objects.title_profile import ExternalIds, TitleProfile


@pytest.fixture
def us_series() -> TrackedTitle:
    """Serie d'origine americaine diffusee par HBO."""
    return TrackedTitle(
        id=100088,
        media_kind=MediaKind.SERIES,
        name="The Last of Us",
        origin_countries=("US",),
    )


@pytest.fixture
def us_series_profile(us_series: TrackedTitle) -> TitleProfile:
    return TitleProfile(
        title=us_series,
        season_numbers=(0, 1, 2),
        networks=("HBO",),
        origin_countries=("US",),
        external_ids=ExternalIds(imdb_id="tt3581920", tvdb_id=392256),
        poster_path="/poster.jpg",
        backdrop_path="/backdrop.jpg",
        overview="Twenty years after...",
    )


@pytest.fixture
def netflix_series() -> TrackedTitle:
    return TrackedTitle(
        id=66732,
        media_kind=MediaKind.SERIES,
        name="Stranger Things",
        origin_countries=("US",),
    )


@pytest.fixture
def netflix_profile(netflix_series: TrackedTitle) -> TitleProfile:
    return TitleProfile(
        title=netflix_series,
        season_numbers=(1, 2, 3),
        networks=("Netflix",),
        origin_countries=("US",),
        external_ids=ExternalIds(imdb_id="tt4574334"),
    )


@pytest.fixture
def movie() -> TrackedTitle:
    return TrackedTitle(
        id=693134,
        media_kind=MediaKind.MOVIE,
        name="Dune: Part Two",
        origin_countries=("US",),
    )


@pytest.fixture
def movie_profile(movie: TrackedTitle) -> TitleProfile:
    return TitleProfile(
        title=movie,
        origin_countries=("US",),
        primary_release_date="2024-02-27",
        poster_path="/dune.jpg",
        backdrop_path="/dune_backdrop.jpg",
    )


@pytest.fixture
def us_settings() -> ScheduleSettings:
    """Spectateur americain, sans decalage."""
    return ScheduleSettings(
        viewer_region="US",
        viewer_timezone="America/New_York",
        retry_wait_seconds=0,
    )


@pytest.fixture
def gb_settings() -> ScheduleSettings:
    """Spectateur britannique avec le decalage Ameriques active."""
    return ScheduleSettings(
        viewer_region="GB",
        viewer_timezone="Europe/London",
        time_shift_enabled=True,
        retry_wait_seconds=0,
    )


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings de test avec chemins temporaires, sans fichier .env."""
    return Settings(
        _env_file=None,
        tmdb_api_key="test_tmdb_key",
        trakt_client_id="test_trakt_client",
        cache_dir=tmp_path / "cache",
        watchlist_file=tmp_path / "watchlist.json",
        log_file=tmp_path / "logs" / "airdates.log",
    )
