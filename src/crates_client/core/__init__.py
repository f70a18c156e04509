"""Core types: errors, ports and the query vocabulary."""

from .errors import CratesClientError, DecodeError, RateLimitTimeout, TransportError, WouldBlock
from .query import Category, Query, Sorting

__all__ = [
    "CratesClientError",
    "DecodeError",
    "RateLimitTimeout",
    "TransportError",
    "WouldBlock",
    "Category",
    "Query",
    "Sorting",
]
