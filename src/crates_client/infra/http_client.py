from __future__ import annotations

import logging

import httpx

from ..core.errors import TransportError
from ..core.ports.transport_port import TransportPort

logger = logging.getLogger(__name__)


class HttpTransport(TransportPort):
    """One GET per call over a single httpx.Client carrying the User-Agent header.

    Status codes are not interpreted: whatever body the server sends back is returned.
    """

    def __init__(self, user_agent: str, timeout_seconds: float = 20.0) -> None:
        if not user_agent:
            raise ValueError("user_agent must be a non-empty string")
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            max_redirects=10
        )

    def fetch(self, url: str) -> bytes:
        _validate_url(url)
        if self._client.is_closed:
            raise TransportError(url, "transport is closed")
        logger.debug(f"GET {url}")
        try:
            resp = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc
        logger.debug(f"GET {url} -> {resp.status_code} ({len(resp.content)} bytes)")
        return resp.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def _validate_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise TransportError(url, f"malformed URL: {exc}") from exc
    if not parsed.is_absolute_url or parsed.scheme not in ("http", "https"):
        raise TransportError(url, "malformed URL: expected an absolute http(s) URL")
