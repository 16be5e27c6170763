import pytest

from rate_limiter import TokenBucket


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_burst_then_denied():
    clock = FakeClock()
    bucket = TokenBucket(rate=5, burst=3, clock=clock)
    assert [bucket.acquire() for _ in range(4)] == [True, True, True, False]


def test_refills_at_rate():
    clock = FakeClock()
    bucket = TokenBucket(rate=4, burst=2, clock=clock)
    assert bucket.acquire() and bucket.acquire()
    assert not bucket.acquire()

    clock.now += 0.125  # half a token
    assert not bucket.acquire()

    clock.now += 0.125
    assert bucket.acquire()
    assert not bucket.acquire()


def test_refill_capped_at_burst():
    clock = FakeClock()
    bucket = TokenBucket(rate=10, burst=2, clock=clock)
    clock.now += 60
    assert bucket.available == pytest.approx(2.0)
    assert [bucket.acquire() for _ in range(3)] == [True, True, False]


def test_invalid_settings():
    with pytest.raises(ValueError):
        TokenBucket(rate=0, burst=1)
    with pytest.raises(ValueError):
        TokenBucket(rate=1, burst=0)
