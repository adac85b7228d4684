"""Fixed-window rate limiter keyed by client identity.

State lives in process memory: it does not survive a restart and is not
shared between instances.
"""

import asyncio
import contextlib
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

import logfire

from .base import Service


@dataclass(frozen=True)
class RateLimitConfig:
    """Limit policy: at most max_requests per window_seconds."""

    window_seconds: float
    max_requests: int


@dataclass
class RateLimitEntry:
    """Request count for one client inside the current window."""

    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate-limit check."""

    allowed: bool
    remaining: int
    reset_at: float

    def retry_after(self, now: float) -> int:
        """Whole seconds until the window resets (at least 1)."""
        return max(1, math.ceil(self.reset_at - now))


class RateLimiter(Service):
    """In-memory fixed-window counter with periodic eviction.

    The sweep task is owned by the instance: start() schedules it on the
    running event loop and stop() cancels it. Checks are guarded by a lock
    so concurrent callers never lose increments.
    """

    def __init__(
        self,
        sweep_interval_seconds: float = 300.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize rate limiter.

        Args:
            sweep_interval_seconds: Delay between evictions of expired entries
            clock: Source of the current time in seconds
        """
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._sweep_interval = sweep_interval_seconds
        self._sweep_task: asyncio.Task | None = None

    def now(self) -> float:
        """Current time as seen by the limiter."""
        return self._clock()

    def check(self, client_key: str, config: RateLimitConfig) -> RateLimitResult:
        """Count a request from client_key and decide whether it is allowed.

        Args:
            client_key: Client identity (usually the IP address)
            config: Limit policy

        Returns:
            Whether the request is allowed, how many remain, and when the
            window resets. A rejected request leaves the window untouched.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(client_key)

            if entry is None or now >= entry.reset_at:
                entry = RateLimitEntry(count=1, reset_at=now + config.window_seconds)
                self._entries[client_key] = entry
                return RateLimitResult(
                    allowed=True,
                    remaining=config.max_requests - 1,
                    reset_at=entry.reset_at,
                )

            if entry.count >= config.max_requests:
                return RateLimitResult(allowed=False, remaining=0, reset_at=entry.reset_at)

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=config.max_requests - entry.count,
                reset_at=entry.reset_at,
            )

    def sweep(self) -> int:
        """Evict entries whose window has expired.

        Returns:
            Number of evicted entries
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.reset_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def running(self) -> bool:
        """Whether the sweep task is active."""
        return self._sweep_task is not None and not self._sweep_task.done()

    def start(self) -> None:
        """Schedule the periodic sweep on the running event loop."""
        if self.running:
            return
        self._sweep_task = asyncio.get_running_loop().create_task(self._sweep_loop())
        logfire.debug("Rate limit sweep started", interval=self._sweep_interval)

    async def stop(self) -> None:
        """Cancel the periodic sweep and wait for it to finish."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logfire.debug("Rate limit sweep stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            evicted = self.sweep()
            if evicted:
                logfire.debug(
                    "Expired rate limit entries evicted",
                    evicted=evicted,
                    remaining=len(self),
                )
