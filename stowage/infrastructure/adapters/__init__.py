"""
Adapter Implementations

Available adapters:
- RedisCacheAdapter: Redis-backed cache adapter
- MemoryCacheAdapter: process-local cache adapter
- RedisPubSubEventBusAdapter: Redis pub/sub event bus adapter
- MemoryEventBusAdapter: process-local event bus adapter
"""

from .memory_cache_adapter import MemoryCacheAdapter
from .memory_event_bus_adapter import MemoryEventBusAdapter
from .redis_cache_adapter import RedisCacheAdapter
from .redis_pubsub_event_bus_adapter import RedisPubSubEventBusAdapter

__all__ = [
    "MemoryCacheAdapter",
    "MemoryEventBusAdapter",
    "RedisCacheAdapter",
    "RedisPubSubEventBusAdapter",
]
