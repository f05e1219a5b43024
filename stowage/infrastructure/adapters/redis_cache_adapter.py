"""
Redis Cache Adapter

Cache adapter backed by redis.asyncio. Every conditional write is a single
atomic Redis command; increments go through a Lua script so a missing key
and a non-numeric value can be told apart without a race.
"""

from typing import Any, List, Optional

import structlog
from redis.asyncio import Redis

from ...core.config import Settings, get_settings
from ...domain.cache.contracts import CacheAdapter, validate_ttl
from ...domain.cache.errors import TypeCacheError
from ...domain.serde.contracts import Serde
from ...utilities.group import (
    GroupPath,
    child_group,
    group_key_prefix,
    namespaced_key,
    normalize_group,
)
from ...utilities.time_span import TimeSpan
from ..redis.clear_iterator import clear_keys
from ..redis.escape import escape_redis_chars
from ..redis.scripts import get_increment_script, is_redis_type_error
from ..redis.tracing import trace_command
from ..serde.json_serde import JsonSerde
from ..serde.redis_serde import RedisSerde

logger = structlog.get_logger(__name__)


class RedisCacheAdapter(CacheAdapter[Any]):
    """
    Redis implementation of the cache adapter contract.

    The client is shared and never closed by the adapter. With
    ``root_group=None`` the adapter is group-unaware: keys are used as-is
    and ``clear`` flushes the whole database.
    """

    def __init__(
        self,
        client: Redis,
        serde: Optional[Serde] = None,
        root_group: Optional[GroupPath] = None,
        scan_count: int = 1000,
    ):
        self._client = client
        base = serde or JsonSerde()
        self._serde = base if isinstance(base, RedisSerde) else RedisSerde(base)
        self._group = normalize_group(root_group) if root_group is not None else None
        self._scan_count = scan_count
        self._increment_script = get_increment_script(client)

    @classmethod
    def from_settings(
        cls,
        client: Redis,
        serde: Optional[Serde] = None,
        settings: Optional[Settings] = None,
    ) -> "RedisCacheAdapter":
        """Adapter scoped to CACHE_ROOT_GROUP with the configured SCAN count."""
        settings = settings or get_settings()
        return cls(
            client,
            serde=serde,
            root_group=settings.CACHE_ROOT_GROUP,
            scan_count=settings.CACHE_SCAN_COUNT,
        )

    def _key(self, key: str) -> str:
        if self._group is None:
            return key
        return namespaced_key(self._group, key)

    def _ttl_ms(self, ttl: Optional[TimeSpan]) -> Optional[int]:
        if validate_ttl(ttl) is None:
            return None
        return ttl.to_milliseconds()

    def get_group(self) -> Optional[str]:
        return self._group

    def with_group(self, group: GroupPath) -> "RedisCacheAdapter":
        if self._group is None:
            new_group = normalize_group(group)
        else:
            new_group = child_group(self._group, group)
        return RedisCacheAdapter(
            self._client,
            serde=self._serde,
            root_group=new_group,
            scan_count=self._scan_count,
        )

    async def get(self, key: str) -> Optional[Any]:
        with trace_command("GET", self._group):
            value = await self._client.get(self._key(key))
        if value is None:
            return None
        return self._serde.deserialize(value)

    async def get_and_remove(self, key: str) -> Optional[Any]:
        with trace_command("GETDEL", self._group):
            value = await self._client.getdel(self._key(key))
        if value is None:
            return None
        return self._serde.deserialize(value)

    async def add(self, key: str, value: Any, ttl: Optional[TimeSpan]) -> bool:
        with trace_command("SET", self._group):
            result = await self._client.set(
                self._key(key),
                self._serde.serialize(value),
                px=self._ttl_ms(ttl),
                nx=True,
            )
        logger.debug("Cache add", key=key, group=self._group, added=bool(result))
        return bool(result)

    async def put(self, key: str, value: Any, ttl: Optional[TimeSpan]) -> bool:
        with trace_command("SET", self._group):
            previous = await self._client.set(
                self._key(key),
                self._serde.serialize(value),
                px=self._ttl_ms(ttl),
                get=True,
            )
        logger.debug(
            "Cache put", key=key, group=self._group, replaced=previous is not None
        )
        return previous is not None

    async def update(self, key: str, value: Any) -> bool:
        with trace_command("SET", self._group):
            result = await self._client.set(
                self._key(key),
                self._serde.serialize(value),
                xx=True,
                keepttl=True,
            )
        logger.debug("Cache update", key=key, group=self._group, updated=bool(result))
        return bool(result)

    async def remove_many(self, keys: List[str]) -> bool:
        if not keys:
            return False
        with trace_command("DEL", self._group):
            deleted = await self._client.delete(*[self._key(key) for key in keys])
        logger.debug("Cache remove", keys=keys, group=self._group, deleted=deleted)
        return deleted > 0

    async def increment(self, key: str, delta: float) -> bool:
        try:
            with trace_command("EVALSHA", self._group):
                result = await self._increment_script(
                    keys=[self._key(key)], args=[self._serde.serialize(delta)]
                )
        except Exception as e:
            if is_redis_type_error(e):
                raise TypeCacheError(key, original_error=e) from e
            raise
        return int(result) == 1

    async def remove_all(self) -> None:
        with trace_command("FLUSHDB", self._group):
            await self._client.flushdb()
        logger.info("Flushed redis database")

    async def remove_by_key_prefix(self, prefix: str) -> None:
        if self._group is None:
            pattern = escape_redis_chars(prefix) + "*"
        else:
            pattern = escape_redis_chars(namespaced_key(self._group, prefix)) + "*"
        await self._sweep(pattern)

    async def clear(self) -> None:
        if self._group is None:
            await self.remove_all()
            return
        await self._sweep(escape_redis_chars(group_key_prefix(self._group)) + "*")

    async def _sweep(self, pattern: str) -> None:
        with trace_command("SCAN", self._group):
            deleted = await clear_keys(self._client, pattern, self._scan_count)
        logger.info(
            "Cleared cache keys", group=self._group, pattern=pattern, deleted=deleted
        )
