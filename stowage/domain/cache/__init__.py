"""
Cache Domain Module

Adapter contract, events and errors for the cache subsystem.
"""

from .contracts import CacheAdapter
from .errors import CacheError, KeyNotFoundCacheError, TypeCacheError
from .events import (
    CACHE_EVENTS,
    CacheEvent,
    KeyAddedCacheEvent,
    KeyDecrementedCacheEvent,
    KeyFoundCacheEvent,
    KeyIncrementedCacheEvent,
    KeyNotFoundCacheEvent,
    KeyRemovedCacheEvent,
    KeysClearedCacheEvent,
    KeyUpdatedCacheEvent,
)

__all__ = [
    "CacheAdapter",
    "CacheError",
    "KeyNotFoundCacheError",
    "TypeCacheError",
    "CACHE_EVENTS",
    "CacheEvent",
    "KeyAddedCacheEvent",
    "KeyDecrementedCacheEvent",
    "KeyFoundCacheEvent",
    "KeyIncrementedCacheEvent",
    "KeyNotFoundCacheEvent",
    "KeyRemovedCacheEvent",
    "KeysClearedCacheEvent",
    "KeyUpdatedCacheEvent",
]
