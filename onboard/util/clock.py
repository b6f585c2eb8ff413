"""Time source injected into services and caches."""

from datetime import datetime, timedelta, timezone


class Clock:
    """Wall clock returning timezone-aware UTC datetimes."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock(Clock):
    """Clock pinned to a settable instant.

    Used by tests and by tooling that replays events at a fixed time.
    """

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, **delta) -> None:
        """Move the clock forward by ``timedelta(**delta)``."""
        self.instant = self.instant + timedelta(**delta)
