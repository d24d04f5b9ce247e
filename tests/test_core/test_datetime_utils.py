"""Tests for datetime helpers."""

from datetime import UTC, timedelta

from brandmotion.core.datetime_utils import utc_after, utc_now


class TestUtcNow:
    def test_is_timezone_aware(self):
        assert utc_now().tzinfo is UTC


class TestUtcAfter:
    def test_offset_from_now(self):
        before = utc_now()
        later = utc_after(minutes=15)

        assert later.tzinfo is UTC
        assert timedelta(minutes=15) <= later - before < timedelta(minutes=15, seconds=5)
