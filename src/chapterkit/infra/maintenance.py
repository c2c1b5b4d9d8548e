"""
Periodic sweeping of expired cache entries and rate-limit windows.
"""

from __future__ import annotations

import asyncio
import logging
import types
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from chapterkit.schemas import SearchConfig

logger = logging.getLogger(__name__)


class SupportsCleanup(Protocol):
    def cleanup(self) -> int: ...


class OwnsCleanupTargets(Protocol):
    def cleanup_targets(self) -> list[SupportsCleanup]: ...


class CleanupScheduler:
    """Runs ``cleanup()`` on a set of targets at a fixed interval.

    The scheduler lives on the host's event loop. Each sweep runs between
    two awaits, so it never interleaves with a cache or limiter call made
    from another task.
    """

    def __init__(
        self,
        targets: Iterable[SupportsCleanup] = (),
        interval: float = 300.0,
    ) -> None:
        """Initializes the scheduler.

        Args:
            targets: Caches and limiters to sweep.
            interval: Seconds between sweeps.

        Raises:
            ValueError: If ``interval`` is not positive.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        self._targets: list[SupportsCleanup] = list(targets)
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def from_config(
        cls,
        cfg: SearchConfig,
        owners: Iterable[OwnsCleanupTargets] = (),
    ) -> Self:
        """Builds a scheduler from the ``general.search`` settings.

        Args:
            cfg: Supplies ``cleanup_interval``.
            owners: Clients and services whose ``cleanup_targets()`` are
                swept.
        """
        targets = [t for owner in owners for t in owner.cleanup_targets()]
        return cls(targets, interval=cfg.cleanup_interval)

    def register(self, target: SupportsCleanup) -> None:
        self._targets.append(target)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> int:
        """Sweeps every target once.

        A failing target is logged and skipped so one bad target cannot
        stop the others from being swept.

        Returns:
            int: Total number of removed entries across all targets.
        """
        removed = 0
        for target in self._targets:
            try:
                removed += target.cleanup()
            except Exception:
                logger.exception("Cleanup failed for %r", target)
        if removed:
            logger.debug("Cleanup sweep removed %d expired entries", removed)
        return removed

    def start(self) -> None:
        """Starts the background sweep on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Cancels the background sweep and waits for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.run_once()

    async def __aenter__(self) -> Self:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.stop()
