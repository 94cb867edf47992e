"""Rate-limit policy: enforce request quotas per pool with a sliding window."""
import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Mapping, Optional

from .logging_setup import logger

TOKEN_METADATA_POOL = "token_metadata"
PAIR_DATA_POOL = "pair_data"


@dataclass(frozen=True)
class RateLimitQuota:
    """Per-pool rate-limit quota."""
    requests_per_window: int  # max requests allowed in the window
    window_seconds: float     # trailing window length in seconds

    def __post_init__(self):
        if self.requests_per_window <= 0:
            raise ValueError(f"requests_per_window must be positive, got {self.requests_per_window}")
        if self.window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {self.window_seconds}")


@dataclass
class QuotaPool:
    """Track admissions for a single named pool.

    ``observed`` holds admission timestamps inside the trailing window and is
    only mutated by ``admit``. The lock is held across the wait, so suspended
    callers are admitted in arrival order. The lock binds to the first event
    loop that waits on it, so a pool (and the manager owning it) belongs to
    one event loop.
    """
    name: str
    quota: RateLimitQuota
    clock: Callable[[], float] = time.monotonic
    observed: Deque[float] = field(default_factory=deque)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    def _evict(self, now: float) -> None:
        while self.observed and now - self.observed[0] >= self.quota.window_seconds:
            self.observed.popleft()

    def _recent(self, now: float) -> List[float]:
        return [t for t in self.observed if now - t < self.quota.window_seconds]

    def is_allowed(self) -> bool:
        """Check if a new request would be admitted right now."""
        return len(self._recent(self.clock())) < self.quota.requests_per_window

    def time_until_allowed(self) -> float:
        """Return seconds until the next admission. 0 if allowed now."""
        now = self.clock()
        recent = self._recent(now)
        if len(recent) < self.quota.requests_per_window:
            return 0.0
        # the slot frees up when the oldest counted request leaves the window
        oldest = recent[-self.quota.requests_per_window]
        return max(0.0, self.quota.window_seconds - (now - oldest))

    async def admit(self) -> float:
        """Suspend until the pool has capacity, then record and return the admission time."""
        async with self._lock:
            while True:
                now = self.clock()
                self._evict(now)
                if len(self.observed) < self.quota.requests_per_window:
                    self.observed.append(now)
                    return now
                wait = self.quota.window_seconds - (now - self.observed[0])
                logger.debug(f"Rate limit reached | pool={self.name} wait={wait:.3f}s")
                await asyncio.sleep(max(wait, 0.0))


class RateLimitManager:
    """Own the named quota pools used by one dispatcher, on one event loop."""

    # Reference DexScreener limits
    DEFAULT_QUOTAS = {
        TOKEN_METADATA_POOL: RateLimitQuota(requests_per_window=60, window_seconds=60),
        PAIR_DATA_POOL: RateLimitQuota(requests_per_window=300, window_seconds=60),
    }

    def __init__(self, quotas: Optional[Mapping[str, RateLimitQuota]] = None, *, clock: Callable[[], float] = time.monotonic):
        quotas = dict(quotas) if quotas is not None else dict(self.DEFAULT_QUOTAS)
        self.pools: Dict[str, QuotaPool] = {
            name: QuotaPool(name=name, quota=quota, clock=clock) for name, quota in quotas.items()
        }

    def __contains__(self, name: str) -> bool:
        return name in self.pools

    def pool(self, name: str) -> QuotaPool:
        """Return the pool registered under ``name``."""
        try:
            return self.pools[name]
        except KeyError:
            raise KeyError(f"Unknown rate-limit pool: {name}") from None

    def is_allowed(self, name: str) -> bool:
        return self.pool(name).is_allowed()

    def time_until_allowed(self, name: str) -> float:
        return self.pool(name).time_until_allowed()

    async def admit(self, name: str) -> float:
        return await self.pool(name).admit()
