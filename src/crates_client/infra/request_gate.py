from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel

from ..core.errors import RateLimitTimeout, WouldBlock
from ..core.ports.clock_port import ClockPort, SystemClock
from ..core.ports.rate_limiter_port import RateLimiterPort
from ..core.ports.transport_port import TransportPort
from .decoder import decode_model, decode_text

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestGate:
    """Put a rate limiter in front of a transport.

    Two access modes share the same limiter:

    - blocking (``get_bytes``): polls the limiter, sleeping ``poll_interval_seconds``
      between attempts, until the request is admitted. Rate limiting never surfaces
      as an error unless an explicit ``timeout`` elapses.
    - non-blocking (``try_get_bytes``): asks the limiter once and raises WouldBlock
      when denied, without sleeping and without touching the transport.

    Transport errors are never retried.
    """

    def __init__(
        self,
        rate_limiter: RateLimiterPort,
        transport: TransportPort,
        clock: Optional[ClockPort] = None,
        poll_interval_seconds: float = 0.1,
    ) -> None:
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")
        self._rate_limiter = rate_limiter
        self._transport = transport
        self._clock: ClockPort = clock or SystemClock()
        self._poll_interval = poll_interval_seconds

    def get_bytes(self, url: str, *, timeout: Optional[float] = None) -> bytes:
        deadline = None if timeout is None else self._clock.monotonic() + timeout
        while not self._rate_limiter.try_acquire():
            if deadline is not None and self._clock.monotonic() >= deadline:
                raise RateLimitTimeout(url, timeout)
            logger.debug(f"Rate limited, waiting {self._poll_interval}s before retrying {url}")
            self._clock.sleep(self._poll_interval)
        return self._transport.fetch(url)

    def try_get_bytes(self, url: str) -> bytes:
        if not self._rate_limiter.try_acquire():
            raise WouldBlock(url, retry_after=self._rate_limiter.remaining())
        return self._transport.fetch(url)

    def fetch(self, url: str, *, block: bool = True, timeout: Optional[float] = None) -> bytes:
        """Dispatch to the blocking or non-blocking path."""
        if block:
            return self.get_bytes(url, timeout=timeout)
        return self.try_get_bytes(url)

    def get_model(
        self,
        url: str,
        model_cls: Type[ModelT],
        *,
        block: bool = True,
        timeout: Optional[float] = None,
    ) -> ModelT:
        return decode_model(model_cls, self.fetch(url, block=block, timeout=timeout))

    def get_text(self, url: str, *, block: bool = True, timeout: Optional[float] = None) -> str:
        return decode_text(self.fetch(url, block=block, timeout=timeout))
