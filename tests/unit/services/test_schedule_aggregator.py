"""
Tests unitaires pour ScheduleAggregator.

Tests couvrant:
- Selection des saisons d'interet
- Tolerance aux pannes d'un fournisseur (avertissement, pas d'arret)
- Timeout et relance unique des appels
- Catalogue indisponible, titre invalide
- Annulation cooperative
"""

import asyncio
import dataclasses
from datetime import date

import pytest

from src.core.entities.tracked_title import MediaKind, TrackedTitle
from src.core.errors import InvalidTitleReference, NoDataFound, ProviderUnavailable
from src.core.value_objects.provider_record import (
    CatalogRecord,
    CommunityRecord,
    EpisodeAirdateRecord,
    ProviderName,
    RawDate,
    RegionalReleaseRecord,
    ReleaseKind,
)
from src.services.schedule_aggregator import (
    CANCELLED_MESSAGE,
    ScheduleAggregator,
    select_seasons_of_interest,
)
from tests.fixtures.provider_mocks import make_adapter_mock, make_catalog_mock


class TestSeasonsOfInterest:
    """Tests pour select_seasons_of_interest."""

    def test_two_latest_plus_specials(self):
        assert select_seasons_of_interest([0, 1, 2, 3]) == (0, 2, 3)

    def test_without_specials(self):
        assert select_seasons_of_interest([1, 2, 3, 4]) == (3, 4)

    def test_order_independent(self):
        assert select_seasons_of_interest([3, 0, 1, 2]) == select_seasons_of_interest([0, 1, 2, 3])

    def test_single_season(self):
        assert select_seasons_of_interest([1]) == (1,)

    def test_only_specials(self):
        assert select_seasons_of_interest([0]) == (0,)

    def test_empty(self):
        assert select_seasons_of_interest([]) == ()


class TestAggregate:
    """Tests pour ScheduleAggregator.aggregate."""

    @pytest.mark.asyncio
    async def test_fetches_seasons_of_interest(self, us_series, us_series_profile, us_settings):
        catalog = make_catalog_mock(us_series_profile)
        airdates = make_adapter_mock(ProviderName.EPISODE_AIRDATES)

        await ScheduleAggregator(catalog, [airdates], us_settings).aggregate(us_series)

        catalog.fetch.assert_awaited_once_with(us_series_profile, (0, 1, 2))
        airdates.fetch.assert_awaited_once_with(us_series_profile, (0, 1, 2))

    @pytest.mark.asyncio
    async def test_unsupported_adapter_not_called(self, us_series, us_series_profile, us_settings):
        catalog = make_catalog_mock(us_series_profile)
        regional = make_adapter_mock(
            ProviderName.REGIONAL_RELEASE, media_kinds=frozenset({MediaKind.MOVIE})
        )

        schedule = await ScheduleAggregator(catalog, [regional], us_settings).aggregate(us_series)

        regional.fetch.assert_not_called()
        assert schedule.warnings == []

    @pytest.mark.asyncio
    async def test_failed_provider_degrades_precedence(
        self, us_series, us_series_profile, us_settings
    ):
        """Le suivi communautaire en panne : la date des episodes est retenue."""
        catalog = make_catalog_mock(
            us_series_profile,
            [CatalogRecord(100088, RawDate.parse("2025-04-12"), season_number=2, episode_number=1)],
        )
        airdates = make_adapter_mock(
            ProviderName.EPISODE_AIRDATES,
            [EpisodeAirdateRecord(100088, RawDate.parse("2025-04-13"), season_number=2, episode_number=1)],
        )
        community = make_adapter_mock(
            ProviderName.COMMUNITY_TRACKING,
            side_effect=ProviderUnavailable(ProviderName.COMMUNITY_TRACKING, "network error"),
        )

        schedule = await ScheduleAggregator(
            catalog, [airdates, community], us_settings
        ).aggregate(us_series)

        assert len(schedule.entries) == 1
        assert schedule.entries[0].source_provider is ProviderName.EPISODE_AIRDATES
        assert schedule.entries[0].canonical_date == date(2025, 4, 13)
        assert [w.provider for w in schedule.warnings] == [ProviderName.COMMUNITY_TRACKING]
        assert schedule.is_degraded

    @pytest.mark.asyncio
    async def test_failed_call_retried_once(self, us_series, us_series_profile, us_settings):
        catalog = make_catalog_mock(us_series_profile)
        community = make_adapter_mock(
            ProviderName.COMMUNITY_TRACKING,
            side_effect=ProviderUnavailable(ProviderName.COMMUNITY_TRACKING, "HTTP 503"),
        )

        await ScheduleAggregator(catalog, [community], us_settings).aggregate(us_series)

        assert community.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_retry_recovers(self, us_series, us_series_profile, us_settings):
        record = CommunityRecord(
            100088, RawDate.parse("2025-04-14T01:00:00Z"), season_number=2, episode_number=1
        )
        catalog = make_catalog_mock(us_series_profile)
        community = make_adapter_mock(
            ProviderName.COMMUNITY_TRACKING,
            side_effect=[ProviderUnavailable(ProviderName.COMMUNITY_TRACKING, "HTTP 503"), [record]],
        )

        schedule = await ScheduleAggregator(catalog, [community], us_settings).aggregate(us_series)

        assert schedule.warnings == []
        assert schedule.entries[0].source_provider is ProviderName.COMMUNITY_TRACKING

    @pytest.mark.asyncio
    async def test_timeout_is_soft_failure(self, us_series, us_series_profile, us_settings):
        async def too_slow(*args):
            await asyncio.sleep(5)
            return []

        settings = dataclasses.replace(us_settings, provider_timeout_seconds=0.05)
        catalog = make_catalog_mock(us_series_profile)
        airdates = make_adapter_mock(ProviderName.EPISODE_AIRDATES, side_effect=too_slow)

        schedule = await ScheduleAggregator(catalog, [airdates], settings).aggregate(us_series)

        assert [(w.provider, w.message) for w in schedule.warnings] == [
            (ProviderName.EPISODE_AIRDATES, "timeout")
        ]
        assert airdates.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_catalog_unavailable_uses_minimal_profile(self, movie, us_settings):
        catalog = make_catalog_mock(None)
        catalog.describe.side_effect = ProviderUnavailable(ProviderName.CATALOG, "HTTP 500")
        regional = make_adapter_mock(
            ProviderName.REGIONAL_RELEASE,
            [
                RegionalReleaseRecord(
                    693134,
                    RawDate.parse("2024-03-01"),
                    release_kind=ReleaseKind.THEATRICAL,
                    country_code="US",
                )
            ],
        )

        schedule = await ScheduleAggregator(catalog, [regional], us_settings).aggregate(movie)

        catalog.fetch.assert_not_called()
        regional_profile = regional.fetch.await_args.args[0]
        assert regional_profile.title is movie
        assert regional_profile.origin_countries == ("US",)
        assert [w.provider for w in schedule.warnings] == [ProviderName.CATALOG]
        assert schedule.entries[0].release_kind is ReleaseKind.THEATRICAL

    @pytest.mark.asyncio
    async def test_non_positive_id_is_invalid(self, us_settings):
        title = TrackedTitle(id=0, media_kind=MediaKind.SERIES, name="Broken")
        catalog = make_catalog_mock(None)

        schedule = await ScheduleAggregator(catalog, [], us_settings).aggregate(title)

        assert isinstance(schedule.invalid, InvalidTitleReference)
        catalog.describe.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_title_is_invalid(self, us_series, us_settings):
        catalog = make_catalog_mock(None)
        catalog.describe.side_effect = InvalidTitleReference(us_series.id, "unknown to catalog")

        schedule = await ScheduleAggregator(catalog, [], us_settings).aggregate(us_series)

        assert schedule.invalid is not None
        assert schedule.entries == []
        assert catalog.describe.await_count == 1

    @pytest.mark.asyncio
    async def test_cancel_abandons_pending_calls(self, us_series, us_series_profile, us_settings):
        async def hang(*args):
            await asyncio.sleep(30)
            return []

        catalog = make_catalog_mock(
            us_series_profile,
            [CatalogRecord(100088, RawDate.parse("2025-04-13"), season_number=2, episode_number=1)],
        )
        community = make_adapter_mock(ProviderName.COMMUNITY_TRACKING, side_effect=hang)
        cancel = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, cancel.set)

        schedule = await asyncio.wait_for(
            ScheduleAggregator(catalog, [community], us_settings).aggregate(us_series, cancel=cancel),
            timeout=5,
        )

        assert [e.source_provider for e in schedule.entries] == [ProviderName.CATALOG]
        assert [(w.provider, w.message) for w in schedule.warnings] == [
            (ProviderName.COMMUNITY_TRACKING, CANCELLED_MESSAGE)
        ]

    @pytest.mark.asyncio
    async def test_cancel_already_set_skips_describe(self, us_series, us_series_profile, us_settings):
        async def slow_describe(title):
            await asyncio.sleep(2)
            return us_series_profile

        catalog = make_catalog_mock(us_series_profile)
        catalog.describe.side_effect = slow_describe
        airdates = make_adapter_mock(ProviderName.EPISODE_AIRDATES)
        cancel = asyncio.Event()
        cancel.set()

        loop = asyncio.get_running_loop()
        started = loop.time()
        schedule = await ScheduleAggregator(catalog, [airdates], us_settings).aggregate(
            us_series, cancel=cancel
        )

        assert loop.time() - started < 0.5
        assert schedule.entries == []
        assert schedule.invalid is None
        assert [(w.provider, w.message) for w in schedule.warnings] == [
            (ProviderName.CATALOG, CANCELLED_MESSAGE)
        ]
        assert catalog.describe.await_count == 0
        assert airdates.fetch.await_count == 0

    @pytest.mark.asyncio
    async def test_cancel_abandons_describe(self, us_series, us_series_profile, us_settings):
        async def slow_describe(title):
            await asyncio.sleep(2)
            return us_series_profile

        catalog = make_catalog_mock(us_series_profile)
        catalog.describe.side_effect = slow_describe
        airdates = make_adapter_mock(ProviderName.EPISODE_AIRDATES)
        cancel = asyncio.Event()
        loop = asyncio.get_running_loop()
        loop.call_later(0.05, cancel.set)

        started = loop.time()
        schedule = await ScheduleAggregator(catalog, [airdates], us_settings).aggregate(
            us_series, cancel=cancel
        )

        assert loop.time() - started < 0.5
        assert schedule.entries == []
        assert [(w.provider, w.message) for w in schedule.warnings] == [
            (ProviderName.CATALOG, CANCELLED_MESSAGE),
            (ProviderName.EPISODE_AIRDATES, CANCELLED_MESSAGE),
        ]
        assert airdates.fetch.await_count == 0

    @pytest.mark.asyncio
    async def test_no_data_is_not_a_failure(self, us_series, us_series_profile, us_settings):
        catalog = make_catalog_mock(us_series_profile)
        airdates = make_adapter_mock(
            ProviderName.EPISODE_AIRDATES, side_effect=NoDataFound("no TVMaze show")
        )

        schedule = await ScheduleAggregator(catalog, [airdates], us_settings).aggregate(us_series)

        assert schedule.warnings == []
        assert airdates.fetch.await_count == 1
