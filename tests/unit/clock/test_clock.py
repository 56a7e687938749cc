"""Tests for time sources."""

from datetime import UTC, datetime, timedelta

from shortener.core.clock import MST, FixedClock, SystemClock


class TestFixedClock:
    def test_default_instant(self):
        """Test that the default instant is 2006-01-02 15:04:05 MST."""
        now = FixedClock().now()
        assert now == datetime(2006, 1, 2, 22, 4, 5, tzinfo=UTC)
        assert now.utcoffset() == timedelta(hours=-7)

    def test_custom_instant_is_stable(self):
        """Test that repeated calls return the configured instant."""
        instant = datetime(2020, 5, 17, 8, 30, tzinfo=MST)
        clock = FixedClock(instant)
        assert clock.now() == instant
        assert clock.now() == clock.now()


class TestSystemClock:
    def test_returns_aware_utc(self):
        """Test that the system clock returns the current UTC time."""
        before = datetime.now(UTC)
        now = SystemClock().now()
        after = datetime.now(UTC)
        assert now.tzinfo is UTC
        assert before <= now <= after
