"""
Redis Infrastructure Exceptions

Exceptions raised by the Redis plumbing itself. Connectivity and protocol
errors from redis-py are never wrapped; they reach the caller unchanged.
"""

from typing import Any, Optional

from ...domain.errors import StowageError


class RedisException(StowageError):
    """Base exception for Redis infrastructure errors."""


class RedisConfigurationException(RedisException):
    """Raised when Redis configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = str(config_value)

        super().__init__(
            message=message,
            error_code="REDIS_CONFIGURATION_ERROR",
            details=details,
            original_error=original_error,
        )


class RedisPatternEscapeError(RedisException):
    """Raised when the pattern escaper matches a character it has no escape for.

    This is an internal consistency bug, never a user error.
    """

    def __init__(self, char: str):
        super().__init__(
            message=f"No escape sequence registered for matched character {char!r}",
            error_code="REDIS_PATTERN_ESCAPE_BUG",
            details={"char": char},
        )
