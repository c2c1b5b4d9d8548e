"""
A generic in-memory cache with per-entry expiry.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypedDict, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: float
    ttl: float


class CacheStats(TypedDict):
    size: int
    keys: list[str]
    oldest_timestamp: float | None
    newest_timestamp: float | None


class TTLCache(Generic[T]):
    """A key/value store whose entries expire after a time-to-live.

    Expiry is lazy: an entry past its TTL is dropped the next time it is
    read through :meth:`get` or :meth:`has`, or when :meth:`cleanup` runs.
    An expired entry is indistinguishable from one that was never stored.
    There is no size bound; memory is reclaimed only by expiry-driven
    removal, so hosts should call :meth:`cleanup` periodically.

    Attributes:
        default_ttl: TTL in seconds used when :meth:`set` gets none.
    """

    __slots__ = ("default_ttl", "_clock", "_data")

    def __init__(
        self,
        default_ttl: float = 300.0,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initializes an empty cache.

        Args:
            default_ttl: Default entry lifetime in seconds.
            clock: Source of the current time in seconds. Tests inject a
                controllable clock here.
        """
        self.default_ttl = float(default_ttl)
        self._clock = clock
        self._data: dict[str, CacheEntry[T]] = {}

    def set(self, key: str, value: T, ttl: float | None = None) -> None:
        """Stores ``value`` under ``key``, replacing any previous entry."""
        self._data[key] = CacheEntry(
            value=value,
            stored_at=self._clock(),
            ttl=self.default_ttl if ttl is None else float(ttl),
        )

    def get(self, key: str) -> T | None:
        """Returns the live value for ``key`` or ``None``."""
        entry = self._data.get(key)
        if entry is None:
            return None
        if self._expired(entry, self._clock()):
            self._data.pop(key, None)
            return None
        return entry.value

    def has(self, key: str) -> bool:
        """Returns whether a live entry exists for ``key``."""
        entry = self._data.get(key)
        if entry is None:
            return False
        if self._expired(entry, self._clock()):
            self._data.pop(key, None)
            return False
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def clear(self) -> None:
        self._data.clear()

    def cleanup(self) -> int:
        """Removes every expired entry.

        Returns:
            int: Number of entries removed.
        """
        now = self._clock()
        dead = [k for k, e in list(self._data.items()) if self._expired(e, now)]
        for k in dead:
            self._data.pop(k, None)
        return len(dead)

    def stats(self) -> CacheStats:
        """Returns a snapshot of the cache contents, expired entries included."""
        entries = list(self._data.items())
        stamps = [e.stored_at for _, e in entries]
        return CacheStats(
            size=len(entries),
            keys=[k for k, _ in entries],
            oldest_timestamp=min(stamps) if stamps else None,
            newest_timestamp=max(stamps) if stamps else None,
        )

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<TTLCache size={len(self._data)} default_ttl={self.default_ttl}>"

    @staticmethod
    def _expired(entry: CacheEntry[T], now: float) -> bool:
        return now - entry.stored_at > entry.ttl
