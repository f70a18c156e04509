from __future__ import annotations

from threading import Lock
from typing import Optional

from ..core.ports.clock_port import ClockPort, SystemClock
from ..core.ports.rate_limiter_port import RateLimiterPort


class MinIntervalRateLimiter(RateLimiterPort):
    """Admit at most one request per ``min_interval_seconds``.

    The time elapsed since the last admitted request is the sole admission
    criterion: no counters, no burst allowance. The stored instant starts one
    interval in the past, so the very first request is admitted immediately.

    Example:
        # crates.io tolerates one request per second
        limiter = MinIntervalRateLimiter(min_interval_seconds=1.0)
        if limiter.try_acquire():
            ...  # perform the request
    """

    def __init__(self, min_interval_seconds: float, clock: Optional[ClockPort] = None) -> None:
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")
        self._interval = min_interval_seconds
        self._clock: ClockPort = clock or SystemClock()
        self._lock = Lock()
        self._last: float = self._clock.monotonic() - self._interval

    @property
    def min_interval_seconds(self) -> float:
        return self._interval

    def try_acquire(self) -> bool:
        with self._lock:
            now = self._clock.monotonic()
            if now - self._last >= self._interval:
                self._last = now
                return True
            return False

    def remaining(self) -> float:
        """Seconds until the next window opens (0.0 if a request would be admitted now)."""
        with self._lock:
            return max(0.0, self._last + self._interval - self._clock.monotonic())
