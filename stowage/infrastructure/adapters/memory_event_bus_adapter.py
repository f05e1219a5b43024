"""
In-Memory Event Bus Adapter

Process-local fan-out of events to listeners. Group views share one
listener registry; channels are namespaced by group.
"""

import inspect
from typing import Dict, List, Optional

import structlog

from ...domain.event_bus.contracts import EventBusAdapter, EventData, Listener
from ...utilities.group import GroupPath, child_group, normalize_group

logger = structlog.get_logger(__name__)


class MemoryEventBusAdapter(EventBusAdapter):
    """Event bus adapter that delivers events inside the current process."""

    def __init__(
        self,
        root_group: GroupPath = "@global",
        registry: Optional[Dict[str, List[Listener]]] = None,
    ):
        self._group = normalize_group(root_group)
        self._registry: Dict[str, List[Listener]] = (
            registry if registry is not None else {}
        )

    def _channel(self, event_name: str) -> str:
        return normalize_group([self._group, event_name])

    def get_group(self) -> Optional[str]:
        return self._group

    def with_group(self, group: GroupPath) -> "MemoryEventBusAdapter":
        return MemoryEventBusAdapter(
            root_group=child_group(self._group, group), registry=self._registry
        )

    async def add_listener(self, event_name: str, listener: Listener) -> None:
        listeners = self._registry.setdefault(self._channel(event_name), [])
        if listener not in listeners:
            listeners.append(listener)

    async def remove_listener(self, event_name: str, listener: Listener) -> None:
        channel = self._channel(event_name)
        listeners = self._registry.get(channel)
        if not listeners or listener not in listeners:
            return
        listeners.remove(listener)
        if not listeners:
            del self._registry[channel]

    async def dispatch(self, event_name: str, event_data: EventData) -> None:
        channel = self._channel(event_name)
        # Copy so listeners may unsubscribe themselves while being called.
        listeners = list(self._registry.get(channel, []))
        logger.debug("Dispatching event", channel=channel, listeners=len(listeners))
        for listener in listeners:
            result = listener(event_data)
            if inspect.isawaitable(result):
                await result
