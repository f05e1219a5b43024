"""
Cache Service

High-level cache built on any cache adapter. Adds defaults, convenience
lookups, optional retries and timeouts, and dispatches a typed event after
every operation.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Type, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field
from tenacity import retry, retry_if_not_exception_type, stop_after_attempt

from ...domain.cache.contracts import CacheAdapter
from ...domain.cache.errors import KeyNotFoundCacheError, TypeCacheError
from ...domain.cache.events import (
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
from ...domain.event_bus.contracts import BaseEvent
from ...infrastructure.adapters.memory_event_bus_adapter import MemoryEventBusAdapter
from ...utilities.group import GroupPath
from ...utilities.time_span import TimeSpan
from ..event_bus.event_bus import EventBus, EventListener, Unsubscribe

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Errors about the stored data or the arguments; retrying cannot change them.
_NON_RETRYABLE = (TypeCacheError, KeyNotFoundCacheError, ValueError)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class CacheSettings(BaseModel):
    """Construction settings for Cache."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    adapter: CacheAdapter
    event_bus: Optional[EventBus] = Field(
        default=None, description="Bus receiving cache events; in-memory if unset"
    )
    default_ttl: Optional[TimeSpan] = Field(
        default=None, description="TTL used when add/put get no explicit ttl"
    )
    retry_attempts: Optional[int] = Field(
        default=None, ge=1, description="Total attempts per adapter call"
    )
    timeout: Optional[TimeSpan] = Field(
        default=None, description="Time limit per adapter call attempt"
    )


async def _resolve(value: Any) -> Any:
    """Call ``value`` if it is callable and await the result if needed."""
    if callable(value):
        value = value()
    if inspect.isawaitable(value):
        value = await value
    return value


class Cache:
    """
    Cache service.

    Events are dispatched on the event bus scoped to the adapter's group,
    so listeners only hear about the cache group they registered on.
    """

    def __init__(self, settings: CacheSettings):
        self._settings = settings
        self._adapter = settings.adapter
        self._root_event_bus = settings.event_bus or EventBus(MemoryEventBusAdapter())
        group = self._adapter.get_group()
        self._event_bus = (
            self._root_event_bus.with_group(group)
            if group is not None
            else self._root_event_bus
        )
        self._default_ttl = settings.default_ttl
        self._retry_attempts = settings.retry_attempts
        self._timeout = settings.timeout

    def get_group(self) -> Optional[str]:
        return self._adapter.get_group()

    def with_group(self, group: GroupPath) -> "Cache":
        return Cache(
            self._settings.model_copy(
                update={
                    "adapter": self._adapter.with_group(group),
                    "event_bus": self._root_event_bus,
                }
            )
        )

    # Event listeners

    async def add_listener(
        self, event_type: Type[CacheEvent], listener: EventListener
    ) -> None:
        await self._event_bus.add_listener(event_type, listener)

    async def add_listener_many(
        self, event_types: Iterable[Type[CacheEvent]], listener: EventListener
    ) -> None:
        await self._event_bus.add_listener_many(event_types, listener)

    async def remove_listener(
        self, event_type: Type[CacheEvent], listener: EventListener
    ) -> None:
        await self._event_bus.remove_listener(event_type, listener)

    async def remove_listener_many(
        self, event_types: Iterable[Type[CacheEvent]], listener: EventListener
    ) -> None:
        await self._event_bus.remove_listener_many(event_types, listener)

    async def listen_once(
        self, event_type: Type[CacheEvent], listener: EventListener
    ) -> None:
        await self._event_bus.listen_once(event_type, listener)

    async def subscribe(
        self, event_type: Type[CacheEvent], listener: EventListener
    ) -> Unsubscribe:
        return await self._event_bus.subscribe(event_type, listener)

    # Execution

    async def _call(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run one adapter call with the configured timeout and retries."""

        async def attempt() -> T:
            if self._timeout is None:
                return await operation()
            return await asyncio.wait_for(operation(), self._timeout.to_seconds())

        if self._retry_attempts is None:
            return await attempt()

        with_retries = retry(
            stop=stop_after_attempt(self._retry_attempts),
            retry=retry_if_not_exception_type(_NON_RETRYABLE),
            reraise=True,
        )
        return await with_retries(attempt)()

    async def _dispatch(self, event: BaseEvent) -> None:
        await self._event_bus.dispatch(event)

    def _ttl(self, ttl: Any) -> Optional[TimeSpan]:
        return self._default_ttl if ttl is UNSET else ttl

    # Reads

    async def get(self, key: str) -> Optional[Any]:
        value = await self._call(lambda: self._adapter.get(key))
        if value is None:
            await self._dispatch(KeyNotFoundCacheEvent(group=self.get_group(), key=key))
        else:
            await self._dispatch(
                KeyFoundCacheEvent(group=self.get_group(), key=key, value=value)
            )
        return value

    async def get_or(self, key: str, default: Any) -> Any:
        """Return the value of ``key`` or ``default``, called and awaited if needed."""
        value = await self.get(key)
        if value is None:
            return await _resolve(default)
        return value

    async def get_or_fail(self, key: str) -> Any:
        value = await self.get(key)
        if value is None:
            raise KeyNotFoundCacheError(key)
        return value

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def missing(self, key: str) -> bool:
        return await self.get(key) is None

    async def get_and_remove(self, key: str) -> Optional[Any]:
        value = await self._call(lambda: self._adapter.get_and_remove(key))
        if value is None:
            await self._dispatch(KeyNotFoundCacheEvent(group=self.get_group(), key=key))
            return None
        await self._dispatch(
            KeyFoundCacheEvent(group=self.get_group(), key=key, value=value)
        )
        await self._dispatch(KeyRemovedCacheEvent(group=self.get_group(), key=key))
        return value

    async def get_or_add(self, key: str, value: Any, ttl: Any = UNSET) -> Any:
        """
        Return the value of ``key``, storing ``value`` first when it is missing.

        ``value`` may be a plain value, a callable or a coroutine function;
        it is only resolved when the key is missing.
        """
        existing = await self.get(key)
        if existing is not None:
            return existing
        resolved = await _resolve(value)
        await self.add(key, resolved, ttl)
        return resolved

    # Writes

    async def add(self, key: str, value: Any, ttl: Any = UNSET) -> bool:
        ttl = self._ttl(ttl)
        added = await self._call(lambda: self._adapter.add(key, value, ttl))
        if added:
            await self._dispatch(self._key_added(key, value, ttl))
        return added

    async def put(self, key: str, value: Any, ttl: Any = UNSET) -> bool:
        """Write ``value``. Returns True when a previous value was replaced."""
        ttl = self._ttl(ttl)
        replaced = await self._call(lambda: self._adapter.put(key, value, ttl))
        if replaced:
            await self._dispatch(
                KeyUpdatedCacheEvent(group=self.get_group(), key=key, value=value)
            )
        else:
            await self._dispatch(self._key_added(key, value, ttl))
        return replaced

    async def update(self, key: str, value: Any) -> bool:
        updated = await self._call(lambda: self._adapter.update(key, value))
        if updated:
            await self._dispatch(
                KeyUpdatedCacheEvent(group=self.get_group(), key=key, value=value)
            )
        else:
            await self._dispatch(KeyNotFoundCacheEvent(group=self.get_group(), key=key))
        return updated

    async def remove(self, key: str) -> bool:
        removed = await self._call(lambda: self._adapter.remove(key))
        if removed:
            await self._dispatch(KeyRemovedCacheEvent(group=self.get_group(), key=key))
        else:
            await self._dispatch(KeyNotFoundCacheEvent(group=self.get_group(), key=key))
        return removed

    async def remove_many(self, keys: List[str]) -> bool:
        """Remove ``keys`` in one adapter call. True when any of them existed."""
        removed = await self._call(lambda: self._adapter.remove_many(keys))
        if removed:
            for key in keys:
                await self._dispatch(
                    KeyRemovedCacheEvent(group=self.get_group(), key=key)
                )
        return removed

    async def increment(self, key: str, delta: float = 1) -> bool:
        incremented = await self._call(lambda: self._adapter.increment(key, delta))
        if not incremented:
            await self._dispatch(KeyNotFoundCacheEvent(group=self.get_group(), key=key))
        elif delta > 0:
            await self._dispatch(
                KeyIncrementedCacheEvent(group=self.get_group(), key=key, value=delta)
            )
        elif delta < 0:
            await self._dispatch(
                KeyDecrementedCacheEvent(group=self.get_group(), key=key, value=-delta)
            )
        return incremented

    async def decrement(self, key: str, delta: float = 1) -> bool:
        return await self.increment(key, -delta)

    async def clear(self) -> None:
        await self._call(self._adapter.clear)
        await self._dispatch(KeysClearedCacheEvent(group=self.get_group()))
        logger.info("Cache cleared", group=self.get_group())

    def _key_added(
        self, key: str, value: Any, ttl: Optional[TimeSpan]
    ) -> KeyAddedCacheEvent:
        return KeyAddedCacheEvent(
            group=self.get_group(),
            key=key,
            value=value,
            ttl_ms=ttl.to_milliseconds() if ttl is not None else None,
        )
