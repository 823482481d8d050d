# Tests for the per-source token bucket
"""
Test suite for metacap.ratelimit.
Uses short real intervals, so keep the numbers small.
"""

import asyncio
import time

import pytest

from metacap.ratelimit import RateLimiter


async def _acquire_n(limiter: RateLimiter, n: int) -> float:
    start = time.monotonic()
    for _ in range(n):
        await limiter.acquire()
    return time.monotonic() - start


class TestConstruction:
    def test_starts_full(self):
        limiter = RateLimiter(capacity=3, interval=1)
        assert limiter.tokens == 3

    @pytest.mark.parametrize('kwargs', [{'capacity': 0}, {'refill': 0}, {'interval': 0}, {'interval': -1}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            RateLimiter(**kwargs)

    def test_repr(self):
        assert repr(RateLimiter(2, 0.5)) == 'RateLimiter(capacity=2, refill=1, interval=0.5)'


class TestAcquire:
    def test_burst_up_to_capacity_does_not_wait(self):
        elapsed = asyncio.run(_acquire_n(RateLimiter(capacity=3, interval=10), 3))
        assert elapsed < 0.5

    def test_waits_once_empty(self):
        elapsed = asyncio.run(_acquire_n(RateLimiter(capacity=2, interval=0.1), 3))
        assert elapsed >= 0.08

    def test_spacing_follows_interval(self):
        elapsed = asyncio.run(_acquire_n(RateLimiter(capacity=1, interval=0.05), 4))
        # first token is free, the next three each wait an interval
        assert elapsed >= 0.13

    def test_concurrent_waiters_all_served(self):
        async def run() -> list[int]:
            limiter = RateLimiter(capacity=1, interval=0.02)
            served: list[int] = []

            async def worker(i: int) -> None:
                await limiter.acquire()
                served.append(i)

            await asyncio.gather(*[worker(i) for i in range(5)])
            return served

        served = asyncio.run(run())
        assert sorted(served) == [0, 1, 2, 3, 4]

    def test_tokens_never_exceed_capacity(self):
        async def run() -> float:
            limiter = RateLimiter(capacity=2, interval=0.01)
            await asyncio.sleep(0.1)
            limiter._top_up()
            return limiter.tokens

        assert asyncio.run(run()) == 2
