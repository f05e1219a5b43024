"""
Unit tests for Redis client creation and settings validation.
"""

import pytest
from pydantic import ValidationError
from redis.asyncio import Redis

from stowage.core.config import Settings
from stowage.infrastructure.redis.connection_factory import (
    close_redis_client,
    create_redis_client,
)
from stowage.infrastructure.redis.exceptions import RedisConfigurationException


class TestCreateRedisClient:
    """Test client construction from settings."""

    async def test_builds_client_from_settings(self):
        settings = Settings(
            REDIS_URL="redis://cache.internal:6380/2", REDIS_MAX_CONNECTIONS=5
        )

        client = create_redis_client(settings)

        assert isinstance(client, Redis)
        kwargs = client.connection_pool.connection_kwargs
        assert kwargs["host"] == "cache.internal"
        assert kwargs["port"] == 6380
        assert kwargs["db"] == 2
        assert kwargs["decode_responses"] is True
        assert client.connection_pool.max_connections == 5
        await close_redis_client(client)

    def test_missing_host_raises_configuration_error(self):
        settings = Settings(REDIS_URL="redis://")

        with pytest.raises(RedisConfigurationException) as exc_info:
            create_redis_client(settings)

        assert exc_info.value.error_code == "REDIS_CONFIGURATION_ERROR"
        assert exc_info.value.details["config_key"] == "REDIS_URL"


class TestSettings:
    """Test settings validation."""

    def test_defaults(self):
        settings = Settings()
        assert settings.CACHE_SCAN_COUNT == 1000
        assert settings.ENVIRONMENT == "test"

    def test_rejects_unknown_scheme(self):
        with pytest.raises(ValidationError):
            Settings(REDIS_URL="http://localhost:6379")

    def test_rejects_empty_root_group(self):
        with pytest.raises(ValidationError):
            Settings(CACHE_ROOT_GROUP="//")

    def test_log_level_is_upper_cased(self):
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
