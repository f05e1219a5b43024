"""
Unit tests for AsyncIterableCollection.
"""

import pytest

from stowage.collection import (
    AsyncIterableCollection,
    EmptyCollectionError,
    ItemNotFoundCollectionError,
    MultipleItemsFoundCollectionError,
)


async def agen(*items):
    for item in items:
        yield item


async def double(x):
    return x * 2


async def is_even(x):
    return x % 2 == 0


class TestAsyncIterableCollectionOperators:
    """Test lazy async operators."""

    async def test_sync_source_with_async_callbacks(self):
        result = await AsyncIterableCollection([1, 2, 3, 4]).filter(is_even).map(
            double
        ).to_list()
        assert result == [4, 8]

    async def test_async_source(self):
        assert await AsyncIterableCollection(agen(1, 2)).map(str).to_list() == [
            "1",
            "2",
        ]

    async def test_operators_are_lazy(self):
        seen = []
        collection = AsyncIterableCollection([1, 2]).tap(seen.append)

        assert seen == []
        await collection.to_list()
        assert seen == [1, 2]

    async def test_take_stops_pulling_from_infinite_source(self):
        async def naturals():
            n = 0
            while True:
                yield n
                n += 1

        assert await AsyncIterableCollection(naturals()).take(3).to_list() == [0, 1, 2]

    async def test_slicing_operators(self):
        collection = AsyncIterableCollection([1, 2, 3, 4])
        assert await collection.take(-1).to_list() == [4]
        assert await collection.skip(2).to_list() == [3, 4]
        assert await collection.skip(-3).to_list() == [1]
        assert await collection.take_while(lambda x: x < 3).to_list() == [1, 2]
        assert await collection.skip_while(lambda x: x < 3).to_list() == [3, 4]

    async def test_reshaping_operators(self):
        collection = AsyncIterableCollection([3, 1, 2])
        assert await collection.chunk(2).to_list() == [[3, 1], [2]]
        assert await collection.zip(agen("a", "b")).to_list() == [(3, "a"), (1, "b")]
        assert await collection.reverse().to_list() == [2, 1, 3]
        assert await collection.sort().to_list() == [1, 2, 3]
        appended = collection.append(agen(9)).prepend([0])
        assert await appended.to_list() == [0, 3, 1, 2, 9]
        assert await collection.pad_start(5, 0).to_list() == [0, 0, 3, 1, 2]
        assert await collection.pad_end(4, 0).to_list() == [3, 1, 2, 0]

    async def test_flat_map_and_unique(self):
        collection = AsyncIterableCollection([1, 2]).flat_map(lambda x: agen(x, x))
        assert await collection.to_list() == [1, 1, 2, 2]
        assert await collection.unique().to_list() == [1, 2]

    async def test_reject(self):
        assert await AsyncIterableCollection([1, 2, 3]).reject(is_even).to_list() == [
            1,
            3,
        ]


class TestAsyncIterableCollectionTerminals:
    """Test async terminal operations."""

    async def test_reduce(self):
        async def add(a, b):
            return a + b

        assert await AsyncIterableCollection([1, 2, 3]).reduce(add) == 6
        with pytest.raises(EmptyCollectionError):
            await AsyncIterableCollection([]).reduce(add)

    async def test_aggregates(self):
        collection = AsyncIterableCollection([4, 1, 3])
        assert await collection.count() == 3
        assert await collection.count(is_even) == 1
        assert await collection.sum() == 8
        assert await collection.average() == 8 / 3
        assert await collection.min() == 1
        assert await collection.max() == 4

    async def test_empty_aggregates(self):
        with pytest.raises(EmptyCollectionError):
            await AsyncIterableCollection([]).average()
        with pytest.raises(EmptyCollectionError):
            await AsyncIterableCollection([]).max()

    async def test_lookups(self):
        collection = AsyncIterableCollection([1, 2, 3, 4])
        assert await collection.first(is_even) == 2
        assert await collection.last(is_even) == 4
        assert await collection.sole(lambda x: x == 3) == 3
        with pytest.raises(ItemNotFoundCollectionError):
            await collection.first_or_fail(lambda x: x > 4)
        with pytest.raises(ItemNotFoundCollectionError):
            await collection.last_or_fail(lambda x: x > 4)
        with pytest.raises(MultipleItemsFoundCollectionError):
            await collection.sole(is_even)

    async def test_predicates_and_grouping(self):
        collection = AsyncIterableCollection([1, 2, 3])
        assert await collection.some(is_even)
        assert not await collection.every(is_even)
        assert not await collection.is_empty()
        assert await AsyncIterableCollection([]).is_empty()
        assert await collection.join() == "1,2,3"
        assert await collection.group_by(is_even) == {False: [1, 3], True: [2]}
        assert await collection.partition(is_even) == ([2], [1, 3])
