import threading

import pytest

from propgeo.adapters.rate_limit import MinIntervalRateLimiter


class FakeTime:
    """Clock and sleep that advance together without real waiting."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps = []

    def clock(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_limiter(fake: FakeTime, interval: float = 1.0) -> MinIntervalRateLimiter:
    return MinIntervalRateLimiter(
        min_interval_seconds=interval,
        name="test",
        clock=fake.clock,
        sleep=fake.sleep,
    )


def test_first_call_is_not_delayed():
    fake = FakeTime(start=50.0)
    limiter = make_limiter(fake)

    assert limiter.wait() is False
    assert fake.sleeps == []
    assert limiter.last_request_time == 50.0


def test_second_call_within_interval_waits_remaining_time():
    fake = FakeTime()
    limiter = make_limiter(fake)

    limiter.wait()
    fake.now += 0.3

    assert limiter.wait() is True
    assert fake.sleeps == [pytest.approx(0.7)]
    # Stamped at call start, after the wait
    assert limiter.last_request_time == pytest.approx(1.0)


def test_calls_spaced_at_least_interval_apart():
    fake = FakeTime()
    limiter = make_limiter(fake)
    call_times = []

    for _ in range(5):
        limiter.wait()
        call_times.append(fake.now)
        fake.now += 0.1

    gaps = [b - a for a, b in zip(call_times, call_times[1:])]
    assert all(gap >= 1.0 - 1e-9 for gap in gaps)


def test_call_after_idle_period_is_not_delayed():
    fake = FakeTime()
    limiter = make_limiter(fake)

    limiter.wait()
    fake.now += 5.0

    assert limiter.wait() is False
    assert fake.sleeps == []


def test_explicit_now_overrides_clock():
    fake = FakeTime()
    limiter = make_limiter(fake)

    assert limiter.wait(now=10.0) is False
    assert limiter.wait(now=10.25) is True
    assert fake.sleeps == [0.75]
    assert limiter.last_request_time == 11.0


def test_reset_forgets_last_call():
    fake = FakeTime()
    limiter = make_limiter(fake)
    limiter.wait()
    limiter.reset()

    assert limiter.wait() is False


def test_concurrent_callers_are_serialized():
    fake = FakeTime()
    limiter = make_limiter(fake)

    threads = [threading.Thread(target=limiter.wait) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert fake.sleeps == [1.0, 1.0, 1.0]
    assert limiter.last_request_time == 3.0
