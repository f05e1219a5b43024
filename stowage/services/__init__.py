"""
Services Module

High-level cache and event bus services built on adapters.
"""

from .cache import Cache, CacheSettings
from .event_bus import EventBus

__all__ = ["Cache", "CacheSettings", "EventBus"]
