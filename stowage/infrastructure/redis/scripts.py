"""
Redis Lua Scripts

Server-side scripts that make conditional writes atomic. Scripts are
registered once per client and tracked by client identity; the client
object itself is never modified.
"""

import threading
import weakref
from typing import Any, Dict, Tuple

import structlog
from redis.asyncio import Redis
from redis.commands.core import AsyncScript
from redis.exceptions import ResponseError

logger = structlog.get_logger(__name__)

# Increments KEYS[1] by ARGV[1] only when the key exists and returns the
# existence flag observed before the increment.
INCREMENT_SCRIPT = """
local hasKey = redis.call("exists", KEYS[1])

if hasKey == 1 then
    redis.call("incrbyfloat", KEYS[1], tonumber(ARGV[1]))
end

return hasKey
"""

REDIS_TYPE_ERROR_MESSAGE = "value is not a valid float"

_registry: Dict[Tuple[int, str], AsyncScript] = {}
_registry_lock = threading.Lock()


def _forget_client(client_id: int) -> None:
    with _registry_lock:
        for registry_key in [k for k in _registry if k[0] == client_id]:
            del _registry[registry_key]


def register_script(client: Redis, name: str, source: str) -> AsyncScript:
    """
    Register ``source`` on ``client`` under ``name`` once.

    Calling it again for the same client returns the already registered
    script. Entries are dropped when the client is garbage collected.
    """
    registry_key = (id(client), name)
    with _registry_lock:
        script = _registry.get(registry_key)
        if script is not None:
            return script

        script = client.register_script(source)
        first_for_client = not any(k[0] == id(client) for k in _registry)
        _registry[registry_key] = script

    if first_for_client:
        weakref.finalize(client, _forget_client, id(client))
    logger.debug("Registered redis script", script=name, sha=script.sha)
    return script


def get_increment_script(client: Redis) -> AsyncScript:
    """Conditional increment script bound to ``client``."""
    return register_script(client, "stowage_cache_increment", INCREMENT_SCRIPT)


def is_redis_type_error(error: Any) -> bool:
    """True when ``error`` is Redis refusing to INCRBYFLOAT a non-numeric value."""
    return isinstance(error, ResponseError) and REDIS_TYPE_ERROR_MESSAGE in str(error)
