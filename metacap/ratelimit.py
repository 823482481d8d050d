# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import asyncio
import time


class RateLimiter:
    """Token bucket gating the requests sent to one external site.

    ``capacity`` tokens are available up front; ``refill`` tokens are added
    every ``interval`` seconds, never exceeding ``capacity``. ``acquire`` only
    ever waits, it never fails or drops a request.
    """

    def __init__(self, capacity: int = 1, interval: float = 1.0, refill: int = 1) -> None:
        if capacity < 1 or refill < 1:
            raise ValueError("capacity and refill must be at least 1")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.capacity = capacity
        self.interval = float(interval)
        self.refill = refill
        self.tokens = float(capacity)
        self._last = time.monotonic()
        self._lock = asyncio.Lock()

    def _top_up(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last
        if elapsed <= 0:
            return
        periods = int(elapsed // self.interval)
        if periods:
            self.tokens = min(self.capacity, self.tokens + periods * self.refill)
            self._last += periods * self.interval
        if self.tokens >= self.capacity:
            # a full bucket does not bank time towards the next refill
            self._last = now

    def _wait_time(self) -> float:
        return max(0.0, self._last + self.interval - time.monotonic())

    async def acquire(self) -> None:
        # waiters queue on the lock, so tokens are handed out in arrival order
        async with self._lock:
            while True:
                self._top_up()
                if self.tokens >= 1:
                    self.tokens -= 1
                    return
                await asyncio.sleep(self._wait_time())

    def __repr__(self) -> str:
        return f"RateLimiter(capacity={self.capacity}, refill={self.refill}, interval={self.interval})"
