"""Read-through cache with per-entry expiry.

Owned by the component that needs it and wired through DI; there is no
module-level cache state.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from onboard.util.clock import Clock

V = TypeVar("V")


@dataclass
class _Entry(Generic[V]):
    value: V
    stored_at: datetime


class TTLCache(Generic[V]):
    """String-keyed cache whose entries lapse ``ttl_seconds`` after storage.

    Expiry is measured with the injected clock, so tests can move time
    forward without sleeping. At most ``max_size`` entries are held: a full
    cache first drops stale entries, then the oldest one.
    """

    def __init__(self, ttl_seconds: float, clock: Clock, max_size: int = 1024) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock
        self.max_size = max_size
        self._entries: dict[str, _Entry[V]] = {}

    def get(self, key: str) -> V | None:
        """Return the cached value, or None when absent or stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_stale(entry, self.clock.now()):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: V) -> None:
        now = self.clock.now()
        # Re-inserting keeps the dict ordered by storage time
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_size:
            self._evict(now)
        self._entries[key] = _Entry(value=value, stored_at=now)

    def _is_stale(self, entry: _Entry[V], now: datetime) -> bool:
        return now - entry.stored_at > self.ttl

    def _evict(self, now: datetime) -> None:
        stale = [k for k, e in self._entries.items() if self._is_stale(e, now)]
        for key in stale:
            del self._entries[key]
        if len(self._entries) >= self.max_size:
            del self._entries[next(iter(self._entries))]

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_load(
        self, key: str, loader: Callable[[], Awaitable[V | None]]
    ) -> V | None:
        """Return the cached value or load, store and return it.

        ``None`` results from the loader are not cached, so a missing record
        is looked up again next time.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        value = await loader()
        if value is not None:
            self.set(key, value)
        return value

    def __len__(self) -> int:
        return len(self._entries)


class NameCache(TTLCache[str]):
    """Display names keyed by ``company:<id>`` or ``user:<id>``."""

    pass
