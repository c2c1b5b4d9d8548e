import pytest

from chapterkit.infra.rate_limiter import FixedWindowRateLimiter


def test_first_n_allowed_then_denied(clock):
    limiter = FixedWindowRateLimiter(3, 60, clock=clock)

    assert [limiter.is_allowed("k") for _ in range(3)] == [True, True, True]
    assert limiter.is_allowed("k") is False
    assert limiter.is_allowed("k") is False
    assert limiter.get_remaining_requests("k") == 0


def test_fresh_window_after_reset(clock):
    limiter = FixedWindowRateLimiter(2, 60, clock=clock)
    limiter.is_allowed("k")
    limiter.is_allowed("k")
    assert limiter.is_allowed("k") is False

    clock.advance(59)
    assert limiter.is_allowed("k") is False

    clock.advance(1)  # now == reset_at opens a new window
    assert limiter.is_allowed("k") is True
    assert limiter.get_remaining_requests("k") == 1
    assert limiter.get_reset_time("k") == 1_060.0 + 60


def test_keys_are_independent(clock):
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)

    assert limiter.is_allowed("a") is True
    assert limiter.is_allowed("a") is False
    assert limiter.is_allowed("b") is True


def test_remaining_and_reset_without_window(clock):
    limiter = FixedWindowRateLimiter(5, 60, clock=clock)

    assert limiter.get_remaining_requests("k") == 5
    assert limiter.get_reset_time("k") is None

    limiter.is_allowed("k")
    assert limiter.get_remaining_requests("k") == 4
    assert limiter.get_reset_time("k") == 1_060.0

    clock.advance(60)
    assert limiter.get_remaining_requests("k") == 5
    assert limiter.get_reset_time("k") is None


def test_denied_requests_are_not_counted(clock):
    limiter = FixedWindowRateLimiter(1, 10, clock=clock)
    limiter.is_allowed("k")
    for _ in range(5):
        limiter.is_allowed("k")

    clock.advance(10)
    assert limiter.is_allowed("k") is True


def test_cleanup_drops_ended_windows(clock):
    limiter = FixedWindowRateLimiter(5, 10, clock=clock)
    limiter.is_allowed("old")
    clock.advance(5)
    limiter.is_allowed("new")
    clock.advance(5)

    assert limiter.cleanup() == 1
    assert limiter.get_reset_time("new") == 1_015.0
    assert limiter.cleanup() == 0


@pytest.mark.parametrize(
    ("max_requests", "window_seconds"),
    [(0, 60), (-1, 60), (5, 0), (5, -1.5)],
)
def test_rejects_quota_that_admits_nothing(max_requests, window_seconds):
    with pytest.raises(ValueError):
        FixedWindowRateLimiter(max_requests, window_seconds)


def test_single_request_quota(clock):
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)

    assert limiter.is_allowed("k") is True
    assert limiter.is_allowed("k") is False
    assert limiter.get_remaining_requests("k") == 0
