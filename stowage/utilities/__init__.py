"""
Utilities Module

Value objects and pure helpers shared across adapters.
"""

from .group import (
    GROUP_DELIMITER,
    KEY_MARKER,
    GroupPath,
    child_group,
    group_key_prefix,
    namespaced_key,
    normalize_group,
)
from .time_span import TimeSpan

__all__ = [
    "GROUP_DELIMITER",
    "KEY_MARKER",
    "GroupPath",
    "TimeSpan",
    "child_group",
    "group_key_prefix",
    "namespaced_key",
    "normalize_group",
]
