"""
Redis infrastructure: client creation, scripts, pattern escaping and
cursor-based bulk deletion.
"""

from .clear_iterator import ClearIterator, clear_keys
from .connection_factory import close_redis_client, create_redis_client
from .escape import escape_redis_chars
from .exceptions import (
    RedisConfigurationException,
    RedisException,
    RedisPatternEscapeError,
)
from .scripts import (
    INCREMENT_SCRIPT,
    get_increment_script,
    is_redis_type_error,
    register_script,
)
from .tracing import trace_command

__all__ = [
    "ClearIterator",
    "clear_keys",
    "create_redis_client",
    "close_redis_client",
    "escape_redis_chars",
    "RedisException",
    "RedisConfigurationException",
    "RedisPatternEscapeError",
    "INCREMENT_SCRIPT",
    "get_increment_script",
    "is_redis_type_error",
    "register_script",
    "trace_command",
]
