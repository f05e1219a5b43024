"""
Redis glob pattern escaping.

Keys built from group names may contain characters that SCAN MATCH would
read as pattern syntax. Every reserved character is prefixed with a backslash.
"""

import re

from .exceptions import RedisPatternEscapeError

_RESERVED_CHARS = ",.<>{}[]\"':;!@#$%^&*()-+=~"

_REPLACEMENTS = {char: "\\" + char for char in _RESERVED_CHARS}

_RESERVED_PATTERN = re.compile(r"[,.<>{}\[\]\"':;!@#$%^&*()\-+=~]")


def _replace(match: "re.Match[str]") -> str:
    char = match.group(0)
    replacement = _REPLACEMENTS.get(char)
    if replacement is None:
        raise RedisPatternEscapeError(char)
    return replacement


def escape_redis_chars(value: str) -> str:
    """Escape reserved characters so ``value`` matches itself literally."""
    return _RESERVED_PATTERN.sub(_replace, value)
