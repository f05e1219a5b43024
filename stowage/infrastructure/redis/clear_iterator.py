"""
Cursor-based bulk deletion.

Deletes every key matching a glob pattern with SCAN + DEL batches, so the
server is never blocked by a full keyspace listing.
"""

from typing import AsyncIterator

import structlog
from redis.asyncio import Redis

logger = structlog.get_logger(__name__)


class ClearIterator(AsyncIterator[int]):
    """
    Lazy deletion sweep over the keys matching ``pattern``.

    Every step scans one cursor page, deletes the matched keys and yields
    how many were deleted. The sweep ends when the cursor wraps back to 0
    or a page matches nothing. Abandoning the iteration early leaves the
    unvisited keys in place; no lock is held and keys written during the
    sweep may or may not be deleted.
    """

    def __init__(self, client: Redis, pattern: str, count: int = 1000):
        self._client = client
        self._pattern = pattern
        self._count = count
        self._cursor = 0
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def __aiter__(self) -> "ClearIterator":
        return self

    async def __anext__(self) -> int:
        if self._done:
            raise StopAsyncIteration

        next_cursor, keys = await self._client.scan(
            self._cursor, match=self._pattern, count=self._count
        )
        if not keys:
            self._done = True
            raise StopAsyncIteration

        deleted = await self._client.delete(*keys)
        self._cursor = int(next_cursor)
        if self._cursor == 0:
            self._done = True

        logger.debug(
            "Cleared key batch",
            pattern=self._pattern,
            deleted=deleted,
            cursor=self._cursor,
        )
        return deleted


async def clear_keys(client: Redis, pattern: str, count: int = 1000) -> int:
    """Run a full sweep and return the total number of deleted keys."""
    total = 0
    async for deleted in ClearIterator(client, pattern, count):
        total += deleted
    return total
