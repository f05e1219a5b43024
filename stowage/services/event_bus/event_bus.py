"""
Event Bus Service

Typed front-end over an event bus adapter. Events are pydantic models;
adapters only ever see the event name and a JSON-compatible dict.
"""

import inspect
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

import structlog

from ...domain.event_bus.contracts import BaseEvent, EventBusAdapter, EventData
from ...domain.event_bus.errors import (
    AddListenerEventBusError,
    DispatchEventBusError,
    RemoveListenerEventBusError,
)
from ...utilities.group import GroupPath

logger = structlog.get_logger(__name__)

TEvent = TypeVar("TEvent", bound=BaseEvent)

EventListener = Callable[[Any], Union[None, Awaitable[None]]]
Unsubscribe = Callable[[], Awaitable[None]]

_WrapperKey = Tuple[Optional[str], str, EventListener]


class EventBus:
    """
    Typed event bus.

    Listeners receive event instances rebuilt from the dispatched data.
    Every adapter failure is re-raised as the matching EventBusError.
    """

    def __init__(
        self,
        adapter: EventBusAdapter,
        _wrappers: Optional[Dict[_WrapperKey, Callable[[EventData], Any]]] = None,
    ):
        self._adapter = adapter
        # Shared with group views so a listener can be removed from any of them.
        self._wrappers: Dict[_WrapperKey, Callable[[EventData], Any]] = (
            _wrappers if _wrappers is not None else {}
        )

    def get_group(self) -> Optional[str]:
        return self._adapter.get_group()

    def with_group(self, group: GroupPath) -> "EventBus":
        return EventBus(self._adapter.with_group(group), _wrappers=self._wrappers)

    def _wrapper_key(
        self, event_type: Type[BaseEvent], listener: EventListener
    ) -> _WrapperKey:
        return (self.get_group(), event_type.event_name(), listener)

    async def add_listener(
        self, event_type: Type[TEvent], listener: EventListener
    ) -> None:
        """Register ``listener`` for ``event_type``. Registering twice has no effect."""
        key = self._wrapper_key(event_type, listener)
        if key in self._wrappers:
            return

        async def wrapper(event_data: EventData) -> None:
            result = listener(event_type.model_validate(event_data))
            if inspect.isawaitable(result):
                await result

        await self._add(event_type, key, wrapper)

    async def listen_once(
        self, event_type: Type[TEvent], listener: EventListener
    ) -> None:
        """Register ``listener`` so it is removed before its first call."""
        key = self._wrapper_key(event_type, listener)
        if key in self._wrappers:
            return

        async def wrapper(event_data: EventData) -> None:
            await self.remove_listener(event_type, listener)
            result = listener(event_type.model_validate(event_data))
            if inspect.isawaitable(result):
                await result

        await self._add(event_type, key, wrapper)

    async def _add(
        self,
        event_type: Type[BaseEvent],
        key: _WrapperKey,
        wrapper: Callable[[EventData], Any],
    ) -> None:
        event_name = event_type.event_name()
        try:
            await self._adapter.add_listener(event_name, wrapper)
        except Exception as e:
            raise AddListenerEventBusError(event_name, original_error=e) from e
        self._wrappers[key] = wrapper
        logger.debug("Listener added", event=event_name, group=self.get_group())

    async def add_listener_many(
        self, event_types: Iterable[Type[BaseEvent]], listener: EventListener
    ) -> None:
        for event_type in event_types:
            await self.add_listener(event_type, listener)

    async def remove_listener(
        self, event_type: Type[TEvent], listener: EventListener
    ) -> None:
        """Unregister ``listener``. Unknown listeners are ignored."""
        key = self._wrapper_key(event_type, listener)
        wrapper = self._wrappers.pop(key, None)
        if wrapper is None:
            return

        event_name = event_type.event_name()
        try:
            await self._adapter.remove_listener(event_name, wrapper)
        except Exception as e:
            raise RemoveListenerEventBusError(event_name, original_error=e) from e
        logger.debug("Listener removed", event=event_name, group=self.get_group())

    async def remove_listener_many(
        self, event_types: Iterable[Type[BaseEvent]], listener: EventListener
    ) -> None:
        for event_type in event_types:
            await self.remove_listener(event_type, listener)

    async def subscribe(
        self, event_type: Type[TEvent], listener: EventListener
    ) -> Unsubscribe:
        """Add ``listener`` and return a coroutine function that removes it."""
        await self.add_listener(event_type, listener)

        async def unsubscribe() -> None:
            await self.remove_listener(event_type, listener)

        return unsubscribe

    async def dispatch(self, event: BaseEvent) -> None:
        event_name = event.event_name()
        try:
            await self._adapter.dispatch(event_name, event.model_dump(mode="json"))
        except Exception as e:
            raise DispatchEventBusError(event_name, original_error=e) from e

    async def dispatch_many(self, events: Iterable[BaseEvent]) -> None:
        for event in events:
            await self.dispatch(event)
