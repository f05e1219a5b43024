"""
Redis Connection Factory

Creates redis.asyncio clients from settings. Clients are shared between
adapters; adapters never close them, the owner does.
"""

from typing import Optional
from urllib.parse import urlparse

import structlog
from redis.asyncio import ConnectionPool, Redis

from ...core.config import Settings, get_settings
from .exceptions import RedisConfigurationException

logger = structlog.get_logger(__name__)


def create_redis_client(settings: Optional[Settings] = None) -> Redis:
    """
    Build a Redis client with pooled connections.

    Args:
        settings: Settings to read connection options from; defaults to
            the cached global settings

    Returns:
        Redis client decoding responses to str

    Raises:
        RedisConfigurationException: If REDIS_URL cannot be parsed
    """
    settings = settings or get_settings()
    redis_url = settings.REDIS_URL

    parsed_url = urlparse(redis_url)
    if parsed_url.scheme in ("redis", "rediss") and not parsed_url.hostname:
        raise RedisConfigurationException(
            message="REDIS_URL has no host",
            config_key="REDIS_URL",
            config_value=redis_url,
        )

    try:
        pool = ConnectionPool.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_CONNECTION_TIMEOUT,
            socket_timeout=settings.REDIS_OPERATION_TIMEOUT,
            health_check_interval=settings.REDIS_HEALTH_CHECK_INTERVAL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
        )
    except ValueError as e:
        raise RedisConfigurationException(
            message=f"Invalid REDIS_URL: {e}",
            config_key="REDIS_URL",
            config_value=redis_url,
            original_error=e,
        ) from e

    logger.info(
        "Redis client created",
        host=parsed_url.hostname,
        port=parsed_url.port,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
    )
    return Redis(connection_pool=pool)


async def close_redis_client(client: Redis) -> None:
    """Close ``client`` and disconnect its pool."""
    await client.aclose()
    await client.connection_pool.disconnect()
    logger.info("Redis client closed")
