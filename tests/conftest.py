"""
Main pytest configuration for stowage tests.

Fakeredis-backed clients (with Lua support) so no Redis server is needed.
"""

import os

import fakeredis
import pytest
import structlog

# Set test environment variables before importing stowage modules
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

from stowage.core.config import get_settings  # noqa: E402

# Configure logging for tests
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; drop the cache around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def fake_server():
    """Isolated in-memory Redis server for one test."""
    return fakeredis.FakeServer()


@pytest.fixture()
async def redis_client(fake_server):
    """A clean async fakeredis client decoding responses to str."""
    client = fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture()
async def listener_client(fake_server):
    """Second client on the same server, used for pub/sub subscriptions."""
    client = fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)
    yield client
    await client.aclose()
