"""
Cache Adapter Contract Tests

Reusable pytest suite every cache adapter must pass. Subclass it in a
``Test*`` class and provide an ``adapter`` fixture returning a fresh,
empty adapter scoped to a group.

    class TestMyCacheAdapter(CacheAdapterTestSuite):
        @pytest.fixture
        async def adapter(self):
            yield MyCacheAdapter(root_group="@a")
"""

import asyncio

import pytest

from ..domain.cache.contracts import CacheAdapter
from ..domain.cache.errors import TypeCacheError
from ..utilities.time_span import TimeSpan

SHORT_TTL = TimeSpan.from_milliseconds(50)
EXPIRY_WAIT_SECONDS = 0.1


class CacheAdapterTestSuite:
    """Behaviour shared by every cache adapter."""

    # get

    async def test_get_returns_value_when_key_exists(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        assert await adapter.get("a") == 1

    async def test_get_returns_none_when_key_missing(self, adapter: CacheAdapter):
        assert await adapter.get("a") is None

    async def test_get_returns_none_when_key_expired(self, adapter: CacheAdapter):
        await adapter.add("a", 1, SHORT_TTL)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.get("a") is None

    async def test_get_preserves_value_types(self, adapter: CacheAdapter):
        await adapter.add("int", 3, None)
        await adapter.add("float", 1.5, None)
        await adapter.add("str", "text", None)
        await adapter.add("list", [1, "b"], None)
        await adapter.add("dict", {"nested": {"x": 1}}, None)

        assert await adapter.get("int") == 3
        assert await adapter.get("float") == 1.5
        assert await adapter.get("str") == "text"
        assert await adapter.get("list") == [1, "b"]
        assert await adapter.get("dict") == {"nested": {"x": 1}}

    # get_and_remove

    async def test_get_and_remove_returns_value_and_removes(
        self, adapter: CacheAdapter
    ):
        await adapter.add("a", "value", None)
        assert await adapter.get_and_remove("a") == "value"
        assert await adapter.get("a") is None

    async def test_get_and_remove_returns_none_when_missing(
        self, adapter: CacheAdapter
    ):
        assert await adapter.get_and_remove("a") is None

    # add

    async def test_add_returns_true_when_key_missing(self, adapter: CacheAdapter):
        assert await adapter.add("a", 1, None) is True

    async def test_add_returns_true_when_key_expired(self, adapter: CacheAdapter):
        await adapter.add("a", 1, SHORT_TTL)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.add("a", 2, None) is True
        assert await adapter.get("a") == 2

    async def test_add_returns_false_when_key_exists(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        assert await adapter.add("a", 2, None) is False

    async def test_add_does_not_overwrite_existing_value(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        await adapter.add("a", 2, None)
        assert await adapter.get("a") == 1

    async def test_zero_ttl_is_rejected(self, adapter: CacheAdapter):
        with pytest.raises(ValueError, match="TTL must be positive"):
            await adapter.add("a", 1, TimeSpan(0))
        with pytest.raises(ValueError, match="TTL must be positive"):
            await adapter.put("a", 1, TimeSpan(0))
        assert await adapter.get("a") is None

    async def test_zero_ttl_is_rejected_for_existing_key(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        with pytest.raises(ValueError, match="TTL must be positive"):
            await adapter.add("a", 2, TimeSpan(0))
        assert await adapter.get("a") == 1

    # update

    async def test_update_returns_true_when_key_exists(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        assert await adapter.update("a", -1) is True
        assert await adapter.get("a") == -1

    async def test_update_returns_false_when_key_missing(self, adapter: CacheAdapter):
        assert await adapter.update("a", -1) is False
        assert await adapter.get("a") is None

    async def test_update_returns_false_when_key_expired(self, adapter: CacheAdapter):
        await adapter.add("a", 1, SHORT_TTL)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.update("a", -1) is False
        assert await adapter.get("a") is None

    async def test_update_keeps_ttl(self, adapter: CacheAdapter):
        await adapter.add("a", 1, SHORT_TTL)
        await adapter.update("a", 2)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.get("a") is None

    # put

    async def test_put_returns_true_when_key_exists(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        assert await adapter.put("a", -1, None) is True
        assert await adapter.get("a") == -1

    async def test_put_returns_false_when_key_missing(self, adapter: CacheAdapter):
        assert await adapter.put("a", -1, None) is False
        assert await adapter.get("a") == -1

    async def test_put_returns_false_when_key_expired(self, adapter: CacheAdapter):
        await adapter.add("a", 1, SHORT_TTL)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.put("a", -1, None) is False
        assert await adapter.get("a") == -1

    async def test_put_replaces_ttl(self, adapter: CacheAdapter):
        await adapter.put("a", 1, None)
        await adapter.put("a", 2, SHORT_TTL)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.get("a") is None

    # remove

    async def test_remove_returns_true_when_key_exists(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        assert await adapter.remove("a") is True
        assert await adapter.get("a") is None

    async def test_remove_returns_false_when_key_missing(self, adapter: CacheAdapter):
        assert await adapter.remove("a") is False

    async def test_remove_returns_false_when_key_expired(self, adapter: CacheAdapter):
        await adapter.add("a", 1, SHORT_TTL)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.remove("a") is False

    async def test_remove_many_returns_true_when_any_exists(
        self, adapter: CacheAdapter
    ):
        await adapter.add("a", 1, None)
        assert await adapter.remove_many(["a", "b"]) is True
        assert await adapter.get("a") is None

    async def test_remove_many_returns_false_for_empty_list(
        self, adapter: CacheAdapter
    ):
        assert await adapter.remove_many([]) is False

    # increment

    async def test_increment_returns_true_when_key_exists(self, adapter: CacheAdapter):
        await adapter.add("a", 1, None)
        assert await adapter.increment("a", 1) is True
        assert await adapter.get("a") == 2

    async def test_increment_supports_floats_and_negative_deltas(
        self, adapter: CacheAdapter
    ):
        await adapter.add("a", 10, None)
        await adapter.increment("a", 0.5)
        assert await adapter.get("a") == 10.5
        await adapter.increment("a", -2.5)
        assert await adapter.get("a") == 8

    async def test_increment_returns_false_when_key_missing(
        self, adapter: CacheAdapter
    ):
        assert await adapter.increment("a", 1) is False
        assert await adapter.get("a") is None

    async def test_increment_returns_false_when_key_expired(
        self, adapter: CacheAdapter
    ):
        await adapter.add("a", 1, SHORT_TTL)
        await asyncio.sleep(EXPIRY_WAIT_SECONDS)
        assert await adapter.increment("a", 1) is False
        assert await adapter.get("a") is None

    async def test_increment_raises_type_error_for_non_numbers(
        self, adapter: CacheAdapter
    ):
        await adapter.add("a", "str", None)
        with pytest.raises(TypeCacheError) as exc_info:
            await adapter.increment("a", 1)
        assert exc_info.value.key == "a"
        assert await adapter.get("a") == "str"

    async def test_concurrent_increments_are_atomic(self, adapter: CacheAdapter):
        await adapter.add("counter", 0, None)
        await asyncio.gather(*[adapter.increment("counter", 1) for _ in range(25)])
        assert await adapter.get("counter") == 25

    async def test_keys_differing_only_in_delimiters_stay_distinct(
        self, adapter: CacheAdapter
    ):
        await adapter.put("https://x.io/page/", "with-slash", None)
        await adapter.put("https://x.io/page", "no-slash", None)
        await adapter.put("a//b", "double", None)
        await adapter.put("a/b", "single", None)

        assert await adapter.get("https://x.io/page/") == "with-slash"
        assert await adapter.get("https://x.io/page") == "no-slash"
        assert await adapter.get("a//b") == "double"
        assert await adapter.get("a/b") == "single"

    # groups

    async def test_groups_do_not_collide(self, adapter: CacheAdapter):
        group_a = adapter.with_group("a")
        group_b = adapter.with_group("b")

        await group_a.add("key", 1, None)
        await group_b.add("key", 2, None)

        assert await group_a.get("key") == 1
        assert await group_b.get("key") == 2
        assert await adapter.get("key") is None

    async def test_with_group_does_not_change_receiver(self, adapter: CacheAdapter):
        group = adapter.get_group()
        child = adapter.with_group("child")
        assert adapter.get_group() == group
        assert child.get_group() != group

    # clear

    async def test_clear_removes_only_own_group(self, adapter: CacheAdapter):
        group_a = adapter.with_group("a")
        group_b = adapter.with_group("b")
        await group_a.add("x", 1, None)
        await group_a.add("y", 2, None)
        await group_b.add("x", 3, None)

        await group_a.clear()

        assert await group_a.get("x") is None
        assert await group_a.get("y") is None
        assert await group_b.get("x") == 3

    async def test_clear_on_empty_group_completes(self, adapter: CacheAdapter):
        await adapter.with_group("empty").clear()
        assert await adapter.with_group("empty").get("a") is None

    async def test_remove_by_key_prefix(self, adapter: CacheAdapter):
        await adapter.add("user:1", 1, None)
        await adapter.add("user:2", 2, None)
        await adapter.add("order:1", 3, None)

        await adapter.remove_by_key_prefix("user:")

        assert await adapter.get("user:1") is None
        assert await adapter.get("user:2") is None
        assert await adapter.get("order:1") == 3

    async def test_remove_by_key_prefix_keeps_delimiters(self, adapter: CacheAdapter):
        await adapter.add("users/1", 1, None)
        await adapter.add("users", 2, None)
        await adapter.add("usersX", 3, None)

        await adapter.remove_by_key_prefix("users/")

        assert await adapter.get("users/1") is None
        assert await adapter.get("users") == 2
        assert await adapter.get("usersX") == 3
