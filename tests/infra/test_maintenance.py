import asyncio

import pytest

from chapterkit.infra.cache import TTLCache
from chapterkit.infra.maintenance import CleanupScheduler
from chapterkit.infra.rate_limiter import FixedWindowRateLimiter
from chapterkit.schemas import SearchConfig


class _Broken:
    def cleanup(self) -> int:
        raise RuntimeError("boom")


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        CleanupScheduler(interval=0)


def test_run_once_sweeps_all_targets(clock):
    cache: TTLCache[str] = TTLCache(10, clock=clock)
    limiter = FixedWindowRateLimiter(5, 10, clock=clock)
    cache.set("a", "1")
    cache.set("b", "2")
    limiter.is_allowed("k")
    clock.advance(11)

    scheduler = CleanupScheduler([cache], interval=60)
    scheduler.register(limiter)

    assert scheduler.run_once() == 3
    assert len(cache) == 0


def test_run_once_survives_failing_target(clock, caplog):
    cache: TTLCache[str] = TTLCache(1, clock=clock)
    cache.set("a", "1")
    clock.advance(2)

    scheduler = CleanupScheduler([_Broken(), cache], interval=60)

    assert scheduler.run_once() == 1
    assert "Cleanup failed" in caplog.text


@pytest.mark.asyncio
async def test_background_loop_runs_and_stops():
    calls = []

    class _Counter:
        def cleanup(self) -> int:
            calls.append(1)
            return 0

    async with CleanupScheduler([_Counter()], interval=0.01) as scheduler:
        assert scheduler.running
        for _ in range(100):
            if len(calls) >= 2:
                break
            await asyncio.sleep(0.01)

    assert len(calls) >= 2
    assert not scheduler.running


@pytest.mark.asyncio
async def test_start_is_idempotent_and_stop_without_start():
    scheduler = CleanupScheduler(interval=60)
    await scheduler.stop()

    scheduler.start()
    scheduler.start()
    assert scheduler.running

    await scheduler.stop()
    assert not scheduler.running


def test_from_config_collects_owner_targets(clock):
    class Owner:
        def __init__(self, *targets):
            self.targets = list(targets)

        def cleanup_targets(self):
            return self.targets

    cache: TTLCache[str] = TTLCache(5, clock=clock)
    limiter = FixedWindowRateLimiter(5, 5, clock=clock)
    cache.set("a", "1")
    limiter.is_allowed("k")
    clock.advance(6)

    scheduler = CleanupScheduler.from_config(
        SearchConfig(cleanup_interval=45.0), [Owner(cache), Owner(limiter)]
    )

    assert scheduler.interval == 45.0
    assert scheduler.run_once() == 2


def test_from_config_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        CleanupScheduler.from_config(SearchConfig(cleanup_interval=0))
