import asyncio


class RateLimiter:
    """Spaces requests at least ``1 / max_rps`` seconds apart.

    Each caller reserves the next free slot under the lock and sleeps outside
    it, so concurrent callers queue up without serializing on the sleep.
    """

    def __init__(self, max_rps: float) -> None:
        if max_rps <= 0:
            raise ValueError(f"max_rps must be positive, got {max_rps}")
        self._interval = 1.0 / max_rps
        self._next_slot = 0.0
        self._lock = asyncio.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    async def acquire(self) -> None:
        async with self._lock:
            now = asyncio.get_running_loop().time()
            slot = max(now, self._next_slot)
            self._next_slot = slot + self._interval
        delay = slot - now
        if delay > 0:
            await asyncio.sleep(delay)
