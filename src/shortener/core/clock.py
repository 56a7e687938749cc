"""Time sources injected into the core."""

from datetime import UTC, datetime, timedelta, timezone
from typing import Protocol

MST = timezone(timedelta(hours=-7), "MST")


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock frozen at a single instant, for deterministic tests."""

    def __init__(self, instant: datetime | None = None) -> None:
        self._instant = instant or datetime(2006, 1, 2, 15, 4, 5, tzinfo=MST)

    def now(self) -> datetime:
        return self._instant
