"""
Cache Adapter Contract

Abstract adapter interface for key-value caching independent of the
backing store. The Cache service is built on top of this contract.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from ...utilities.group import GroupPath
from ...utilities.time_span import TimeSpan

TValue = TypeVar("TValue")


class CacheAdapter(ABC, Generic[TValue]):
    """
    Contract every cache adapter implements.

    Adapters are immutable value-like wrappers around a shared store
    connection. ``with_group`` returns a new adapter scoped to a child
    group; the receiver is never mutated. A group-unaware adapter has
    ``get_group() is None`` and works on raw keys.
    """

    @abstractmethod
    def get_group(self) -> Optional[str]:
        """Normalized group the adapter is scoped to, or None."""
        pass

    @abstractmethod
    def with_group(self, group: GroupPath) -> "CacheAdapter[TValue]":
        """Return a new adapter scoped to ``group`` nested under the current one."""
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[TValue]:
        """Return the value for ``key`` or None when it is missing."""
        pass

    @abstractmethod
    async def get_and_remove(self, key: str) -> Optional[TValue]:
        """Return the value for ``key`` and delete it in the same step."""
        pass

    @abstractmethod
    async def add(self, key: str, value: TValue, ttl: Optional[TimeSpan]) -> bool:
        """
        Write ``value`` only when ``key`` is absent.

        Args:
            key: Bare cache key
            value: Value to store
            ttl: Relative expiry, or None for no expiry

        Returns:
            True when the value was written
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: TValue, ttl: Optional[TimeSpan]) -> bool:
        """
        Write ``value`` unconditionally, replacing any previous ttl.

        Returns:
            True when a previous value existed and was replaced
        """
        pass

    @abstractmethod
    async def update(self, key: str, value: TValue) -> bool:
        """Write ``value`` only when ``key`` already exists. Keeps the ttl."""
        pass

    async def remove(self, key: str) -> bool:
        """Delete ``key``. Returns True when it existed."""
        return await self.remove_many([key])

    @abstractmethod
    async def remove_many(self, keys: List[str]) -> bool:
        """Delete ``keys``. Returns True when at least one of them existed."""
        pass

    @abstractmethod
    async def increment(self, key: str, delta: float) -> bool:
        """
        Add ``delta`` to the numeric value stored at ``key`` if it exists.

        Returns:
            True when the key existed and was incremented

        Raises:
            TypeCacheError: If the stored value is not a number
        """
        pass

    @abstractmethod
    async def remove_all(self) -> None:
        """Wipe the whole backing store."""
        pass

    @abstractmethod
    async def remove_by_key_prefix(self, prefix: str) -> None:
        """Delete every key whose bare name starts with ``prefix``."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Delete every key of the adapter's group."""
        pass


def validate_ttl(ttl: Optional[TimeSpan]) -> Optional[TimeSpan]:
    """
    Reject zero TTLs before they reach the store.

    ``None`` means no expiry. A zero span is refused rather than written as
    an already expired entry, since Redis rejects ``PX 0`` outright.
    """
    if ttl is not None and ttl.to_milliseconds() <= 0:
        raise ValueError("TTL must be positive")
    return ttl
