"""
stowage

Lazy collections plus cache and event bus adapters with Redis as the
primary backing store.
"""

from .collection import AsyncIterableCollection, IterableCollection
from .infrastructure.adapters import (
    MemoryCacheAdapter,
    MemoryEventBusAdapter,
    RedisCacheAdapter,
    RedisPubSubEventBusAdapter,
)
from .services import Cache, CacheSettings, EventBus
from .utilities import TimeSpan

__version__ = "0.1.0"

__all__ = [
    "AsyncIterableCollection",
    "IterableCollection",
    "MemoryCacheAdapter",
    "MemoryEventBusAdapter",
    "RedisCacheAdapter",
    "RedisPubSubEventBusAdapter",
    "Cache",
    "CacheSettings",
    "EventBus",
    "TimeSpan",
]
