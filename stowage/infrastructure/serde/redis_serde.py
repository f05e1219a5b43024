"""
Redis Serde

Wraps a base serde so numbers are stored as bare numeric strings.
Redis can only INCRBYFLOAT a value it can parse as a float, so numbers
must never go through the base serde.
"""

import math
import re
from typing import Any

from ...domain.serde.contracts import Serde

_INTEGER_PATTERN = re.compile(r"^-?\d+$")
_FLOAT_PATTERN = re.compile(r"^-?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")


def _is_plain_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


class RedisSerde(Serde):
    """Serde that keeps numbers readable by Redis numeric commands."""

    def __init__(self, base: Serde):
        self._base = base

    @property
    def base(self) -> Serde:
        return self._base

    def serialize(self, value: Any) -> str:
        if _is_plain_number(value):
            return repr(value)
        return self._base.serialize(value)

    def deserialize(self, value: str) -> Any:
        if _INTEGER_PATTERN.match(value):
            return int(value)
        if _FLOAT_PATTERN.match(value):
            return float(value)
        return self._base.deserialize(value)
