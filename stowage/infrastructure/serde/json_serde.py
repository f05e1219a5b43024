"""
JSON Serde

Default serde backed by the standard json module.
"""

import json
from typing import Any

from ...domain.serde.contracts import Serde
from ...domain.serde.errors import DeserializationError, SerializationError


class JsonSerde(Serde):
    """Serializes JSON-compatible values (dict, list, str, numbers, bool, None)."""

    def serialize(self, value: Any) -> str:
        try:
            return json.dumps(value, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise SerializationError(original_error=e) from e

    def deserialize(self, value: str) -> Any:
        try:
            return json.loads(value)
        except (TypeError, ValueError) as e:
            raise DeserializationError(original_error=e) from e
