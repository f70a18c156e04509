from __future__ import annotations

from typing import Protocol


class TransportPort(Protocol):
    def fetch(self, url: str) -> bytes:
        """Perform exactly one GET against url and return the raw response body.

        Raises TransportError on malformed URLs and network failures. No retries.
        """
        ...

    def close(self) -> None:
        """Release the underlying connection resources."""
