"""crates_client package: app/core/infra/config.

Expose the library-friendly API client and its error types at the package level.
"""

from .app.api import AppConfig, CratesClient
from .core.errors import CratesClientError, DecodeError, RateLimitTimeout, TransportError, WouldBlock
from .core.query import Category, Query, Sorting

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CratesClient",
    "AppConfig",
    "Query",
    "Sorting",
    "Category",
    "CratesClientError",
    "TransportError",
    "WouldBlock",
    "RateLimitTimeout",
    "DecodeError",
]
