"""
Event Bus Service

Typed event bus built on any event bus adapter.
"""

from .event_bus import EventBus, EventListener, Unsubscribe

__all__ = ["EventBus", "EventListener", "Unsubscribe"]
