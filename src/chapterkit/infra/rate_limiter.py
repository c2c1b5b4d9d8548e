"""
A fixed-window request quota tracker.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(slots=True)
class RateWindow:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Tracks request counts per key in fixed time windows.

    The first request for a key opens a window of ``window_seconds``. Up to
    ``max_requests`` calls are admitted inside that window; further calls
    are rejected until the window ends. A new request after the window end
    replaces the window outright, so counts never decay gradually.

    Attributes:
        max_requests: Requests admitted per window.
        window_seconds: Window length in seconds.
    """

    __slots__ = ("max_requests", "window_seconds", "_clock", "_windows")

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initializes the limiter.

        Args:
            max_requests: Number of requests allowed per window.
            window_seconds: Length of each window in seconds.
            clock: Source of the current time in seconds.

        Raises:
            ValueError: If ``max_requests`` is below 1 or ``window_seconds``
                is not positive.
        """
        if int(max_requests) < 1:
            raise ValueError(f"max_requests must be at least 1, got {max_requests!r}")
        if float(window_seconds) <= 0:
            raise ValueError(
                f"window_seconds must be positive, got {window_seconds!r}"
            )
        self.max_requests = int(max_requests)
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self._windows: dict[str, RateWindow] = {}

    def is_allowed(self, key: str) -> bool:
        """Records a request for ``key`` and reports whether it is admitted.

        Rejected requests are not counted.
        """
        now = self._clock()
        window = self._windows.get(key)

        if window is None or now >= window.reset_at:
            self._windows[key] = RateWindow(count=1, reset_at=now + self.window_seconds)
            return True

        if window.count >= self.max_requests:
            return False

        window.count += 1
        return True

    def get_remaining_requests(self, key: str) -> int:
        window = self._active(key)
        if window is None:
            return self.max_requests
        return max(0, self.max_requests - window.count)

    def get_reset_time(self, key: str) -> float | None:
        """Returns the end of the active window for ``key``, if any."""
        window = self._active(key)
        return window.reset_at if window is not None else None

    def cleanup(self) -> int:
        """Drops every window that has ended.

        Returns:
            int: Number of windows removed.
        """
        now = self._clock()
        stale = [k for k, w in list(self._windows.items()) if now >= w.reset_at]
        for k in stale:
            self._windows.pop(k, None)
        return len(stale)

    def _active(self, key: str) -> RateWindow | None:
        window = self._windows.get(key)
        if window is None or self._clock() >= window.reset_at:
            return None
        return window

    def __repr__(self) -> str:
        return (
            f"<FixedWindowRateLimiter max_requests={self.max_requests} "
            f"window_seconds={self.window_seconds} keys={len(self._windows)}>"
        )
