from __future__ import annotations


class CratesClientError(Exception):
    """Base class for every error raised by crates_client."""


class TransportError(CratesClientError):
    """The HTTP round trip failed: malformed URL, connection or network failure."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"GET {url} failed: {message}")
        self.url = url


class WouldBlock(CratesClientError):
    """A non-blocking request was issued before the rate-limit window elapsed.

    ``retry_after`` is the number of seconds until the next window opens, as
    observed when the request was denied. Another caller may still win that window.
    """

    def __init__(self, url: str, retry_after: float = 0.0, message: str | None = None) -> None:
        super().__init__(message or f"rate limit window still open for {url} (retry in {retry_after:.3f}s)")
        self.url = url
        self.retry_after = retry_after


class RateLimitTimeout(WouldBlock):
    """A blocking request gave up waiting for the rate limiter."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(url, message=f"rate limiter did not admit {url} within {timeout}s")
        self.timeout = timeout


class DecodeError(CratesClientError):
    """The response body is not valid UTF-8 or does not match the expected JSON shape."""


__all__ = [
    "CratesClientError",
    "TransportError",
    "WouldBlock",
    "RateLimitTimeout",
    "DecodeError",
]
