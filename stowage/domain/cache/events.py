"""
Cache Events

Typed events the Cache service dispatches after each operation.
All events carry the group of the cache that produced them.
"""

from typing import Any, Optional

from pydantic import Field

from ..event_bus.contracts import BaseEvent


class CacheEvent(BaseEvent):
    """Common fields of every cache event."""

    group: Optional[str] = Field(default=None, description="Cache group")


class KeyFoundCacheEvent(CacheEvent):
    key: str
    value: Any = None


class KeyNotFoundCacheEvent(CacheEvent):
    key: str


class KeyAddedCacheEvent(CacheEvent):
    key: str
    value: Any = None
    ttl_ms: Optional[int] = Field(
        default=None, description="Relative expiry in milliseconds, None for none"
    )


class KeyUpdatedCacheEvent(CacheEvent):
    key: str
    value: Any = None


class KeyRemovedCacheEvent(CacheEvent):
    key: str


class KeyIncrementedCacheEvent(CacheEvent):
    key: str
    value: float


class KeyDecrementedCacheEvent(CacheEvent):
    key: str
    value: float


class KeysClearedCacheEvent(CacheEvent):
    pass


CACHE_EVENTS = (
    KeyFoundCacheEvent,
    KeyNotFoundCacheEvent,
    KeyAddedCacheEvent,
    KeyUpdatedCacheEvent,
    KeyRemovedCacheEvent,
    KeyIncrementedCacheEvent,
    KeyDecrementedCacheEvent,
    KeysClearedCacheEvent,
)
