"""
Unit tests for MemoryCacheAdapter.
"""

import pytest

from stowage.infrastructure.adapters import MemoryCacheAdapter
from stowage.testing import CacheAdapterTestSuite


class TestMemoryCacheAdapter(CacheAdapterTestSuite):
    """Run the cache adapter contract in memory."""

    @pytest.fixture
    async def adapter(self):
        yield MemoryCacheAdapter(root_group="@a")


class TestMemoryCacheAdapterStore:
    """Test store sharing between group views."""

    async def test_group_views_share_store(self):
        root = MemoryCacheAdapter()
        child = root.with_group("child")

        await child.add("k", 1, None)
        await root.remove_all()

        assert await child.get("k") is None

    async def test_add_increment_remove_scenario(self):
        adapter = MemoryCacheAdapter(root_group="@a")

        assert await adapter.add("x", 5, None) is True
        assert await adapter.add("x", 9, None) is False
        assert await adapter.get("x") == 5
        assert await adapter.increment("x", 3) is True
        assert await adapter.get("x") == 8
        assert await adapter.remove("x") is True
        assert await adapter.get("x") is None
