"""Timezone-aware datetime helpers."""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(UTC)


def utc_after(**delta: float) -> datetime:
    """UTC time offset from now, e.g. ``utc_after(minutes=15)``."""
    return utc_now() + timedelta(**delta)
