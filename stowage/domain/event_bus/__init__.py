"""
Event Bus Domain Module

Contracts, base event model and errors for event bus adapters.
"""

from .contracts import BaseEvent, EventBusAdapter, EventData, Listener
from .errors import (
    AddListenerEventBusError,
    DispatchEventBusError,
    EventBusError,
    RemoveListenerEventBusError,
)

__all__ = [
    "BaseEvent",
    "EventBusAdapter",
    "EventData",
    "Listener",
    "EventBusError",
    "DispatchEventBusError",
    "AddListenerEventBusError",
    "RemoveListenerEventBusError",
]
