"""
Contract Test Suites

Reusable pytest suites for adapter implementations. Requires the ``test``
extra (pytest, pytest-asyncio).
"""

from .cache_adapter_test_suite import CacheAdapterTestSuite
from .event_bus_adapter_test_suite import EventBusAdapterTestSuite

__all__ = ["CacheAdapterTestSuite", "EventBusAdapterTestSuite"]
