"""
Tests unitaires pour l'instantane des preferences.
"""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from src.core.value_objects.schedule_settings import ScheduleSettings


class TestScheduleSettings:
    def test_defaults(self):
        settings = ScheduleSettings()

        assert settings.viewer_region == "US"
        assert settings.tzinfo.key == "America/New_York"
        assert not settings.community_tracking_enabled

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValueError, match="Europe/Lond"):
            ScheduleSettings(viewer_region="GB", viewer_timezone="Europe/Lond")

    def test_replace_revalidates_timezone(self, gb_settings):
        with pytest.raises(ValueError):
            replace(gb_settings, viewer_timezone="Europe/Lond")

    def test_tzinfo_converts_instants(self, gb_settings):
        instant = datetime(2025, 7, 1, 23, 30, tzinfo=timezone.utc)

        assert instant.astimezone(gb_settings.tzinfo).day == 2
