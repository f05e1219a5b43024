"""
Event Bus Contracts

Adapter contract for dispatching and listening to events independent of
the underlying transport, and the base model every typed event extends.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from ...utilities.group import GroupPath

EventData = Dict[str, Any]

# Listeners may be plain functions or coroutine functions.
Listener = Callable[[Any], Union[None, Awaitable[None]]]


class BaseEvent(BaseModel):
    """Base class for typed events. The event name is the class name."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def event_name(cls) -> str:
        return cls.__name__


class EventBusAdapter(ABC):
    """
    Contract every event bus adapter implements.

    Event names are scoped to the adapter's group, so two adapters with
    different groups never see each other's events.
    """

    @abstractmethod
    def get_group(self) -> Optional[str]:
        """Normalized group the adapter is scoped to."""
        pass

    @abstractmethod
    def with_group(self, group: GroupPath) -> "EventBusAdapter":
        """Return a new adapter scoped to ``group`` nested under the current one."""
        pass

    @abstractmethod
    async def add_listener(self, event_name: str, listener: Listener) -> None:
        """Register ``listener`` for ``event_name``. Adding it twice has no effect."""
        pass

    @abstractmethod
    async def remove_listener(self, event_name: str, listener: Listener) -> None:
        """Unregister ``listener``. Removing an unknown listener has no effect."""
        pass

    @abstractmethod
    async def dispatch(self, event_name: str, event_data: EventData) -> None:
        """Deliver ``event_data`` to every listener of ``event_name``."""
        pass
