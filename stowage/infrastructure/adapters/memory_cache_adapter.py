"""
In-Memory Cache Adapter

Process-local cache adapter over a plain dict. Group views share the same
store, entries expire lazily on access.
"""

import math
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from ...domain.cache.contracts import CacheAdapter, validate_ttl
from ...domain.cache.errors import TypeCacheError
from ...utilities.group import (
    GroupPath,
    child_group,
    group_key_prefix,
    namespaced_key,
    normalize_group,
)
from ...utilities.time_span import TimeSpan

logger = structlog.get_logger(__name__)


@dataclass
class _Entry:
    value: Any
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


def _expires_at(ttl: Optional[TimeSpan]) -> Optional[float]:
    if validate_ttl(ttl) is None:
        return None
    return time.monotonic() + ttl.to_seconds()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class MemoryCacheAdapter(CacheAdapter[Any]):
    """
    Dict-backed implementation of the cache adapter contract.

    Every operation runs without awaiting anything, so each one is atomic
    with respect to other coroutines on the same event loop.
    """

    def __init__(
        self,
        root_group: Optional[GroupPath] = None,
        store: Optional[Dict[str, _Entry]] = None,
    ):
        self._store: Dict[str, _Entry] = store if store is not None else {}
        self._group = normalize_group(root_group) if root_group is not None else None

    def _key(self, key: str) -> str:
        if self._group is None:
            return key
        return namespaced_key(self._group, key)

    def _live_entry(self, full_key: str) -> Optional[_Entry]:
        entry = self._store.get(full_key)
        if entry is None:
            return None
        if entry.is_expired(time.monotonic()):
            del self._store[full_key]
            return None
        return entry

    def get_group(self) -> Optional[str]:
        return self._group

    def with_group(self, group: GroupPath) -> "MemoryCacheAdapter":
        if self._group is None:
            new_group = normalize_group(group)
        else:
            new_group = child_group(self._group, group)
        return MemoryCacheAdapter(root_group=new_group, store=self._store)

    async def get(self, key: str) -> Optional[Any]:
        entry = self._live_entry(self._key(key))
        return None if entry is None else entry.value

    async def get_and_remove(self, key: str) -> Optional[Any]:
        full_key = self._key(key)
        entry = self._live_entry(full_key)
        if entry is None:
            return None
        del self._store[full_key]
        return entry.value

    async def add(self, key: str, value: Any, ttl: Optional[TimeSpan]) -> bool:
        expires_at = _expires_at(ttl)
        full_key = self._key(key)
        if self._live_entry(full_key) is not None:
            return False
        self._store[full_key] = _Entry(value, expires_at)
        return True

    async def put(self, key: str, value: Any, ttl: Optional[TimeSpan]) -> bool:
        expires_at = _expires_at(ttl)
        full_key = self._key(key)
        existed = self._live_entry(full_key) is not None
        self._store[full_key] = _Entry(value, expires_at)
        return existed

    async def update(self, key: str, value: Any) -> bool:
        entry = self._live_entry(self._key(key))
        if entry is None:
            return False
        entry.value = value
        return True

    async def remove_many(self, keys: List[str]) -> bool:
        removed = False
        for key in keys:
            full_key = self._key(key)
            if self._live_entry(full_key) is not None:
                del self._store[full_key]
                removed = True
        return removed

    async def increment(self, key: str, delta: float) -> bool:
        entry = self._live_entry(self._key(key))
        if entry is None:
            return False
        if not _is_number(entry.value):
            raise TypeCacheError(key)
        result = entry.value + delta
        if isinstance(result, float) and math.isfinite(result) and result.is_integer():
            result = int(result)
        entry.value = result
        return True

    async def remove_all(self) -> None:
        self._store.clear()

    async def remove_by_key_prefix(self, prefix: str) -> None:
        if self._group is None:
            full_prefix = prefix
        else:
            full_prefix = namespaced_key(self._group, prefix)
        self._remove_matching(full_prefix)

    async def clear(self) -> None:
        if self._group is None:
            await self.remove_all()
            return
        self._remove_matching(group_key_prefix(self._group))

    def _remove_matching(self, full_prefix: str) -> None:
        keys = [key for key in self._store if key.startswith(full_prefix)]
        for key in keys:
            del self._store[key]
        logger.debug("Cleared memory cache keys", prefix=full_prefix, deleted=len(keys))
