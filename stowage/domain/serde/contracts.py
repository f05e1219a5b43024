"""
Serde Contract

A serde turns values into the string payloads a backing store keeps and
back again. Implementations must round-trip every value they accept.
"""

from abc import ABC, abstractmethod
from typing import Any


class Serde(ABC):
    """String serializer/deserializer contract."""

    @abstractmethod
    def serialize(self, value: Any) -> str:
        """Serialize ``value`` to a string payload."""
        pass

    @abstractmethod
    def deserialize(self, value: str) -> Any:
        """Rebuild the value stored in ``value``."""
        pass
