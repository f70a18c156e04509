from __future__ import annotations

from typing import Protocol


class RateLimiterPort(Protocol):
    def try_acquire(self) -> bool:
        """Return True and consume the current window if a request is permitted now.

        Must never sleep. The check and the update of the stored instant happen atomically.
        """
        ...

    def remaining(self) -> float:
        """Seconds until the next window opens (0.0 if a request would be admitted now)."""
        ...
