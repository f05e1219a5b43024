"""
Cache Service

High-level cache built on any cache adapter.
"""

from .cache import UNSET, Cache, CacheSettings

__all__ = ["Cache", "CacheSettings", "UNSET"]
