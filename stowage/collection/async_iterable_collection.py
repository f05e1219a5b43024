"""
Lazy Async Iterable Collection

Asynchronous counterpart of IterableCollection. Sources may be sync or
async iterables and every callback may be a plain function or a coroutine
function.
"""

import inspect
from typing import (
    Any,
    AsyncIterable,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from .errors import (
    EmptyCollectionError,
    ItemNotFoundCollectionError,
    MultipleItemsFoundCollectionError,
)

T = TypeVar("T")
U = TypeVar("U")

AnyIterable = Union[Iterable[T], AsyncIterable[T]]
MaybeAsync = Callable[..., Union[U, Awaitable[U]]]

_MISSING: Any = object()


async def _call(fn: Callable[..., Any], *args: Any) -> Any:
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def _iterate(source: AnyIterable[T]) -> AsyncIterator[T]:
    if isinstance(source, AsyncIterable):
        async for item in source:
            yield item
    else:
        for item in source:
            yield item


class AsyncIterableCollection(Generic[T]):
    """Lazy collection over a sync or async iterable."""

    def __init__(self, source: AnyIterable[T] = ()):
        self._source = source

    def __aiter__(self) -> AsyncIterator[T]:
        return _iterate(self._source).__aiter__()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source!r})"

    def _derive(
        self, factory: Callable[[], AsyncIterator[U]]
    ) -> "AsyncIterableCollection[U]":
        return AsyncIterableCollection(_AsyncRegenerable(factory))

    # Operators

    def map(self, fn: MaybeAsync[U]) -> "AsyncIterableCollection[U]":
        async def mapped() -> AsyncIterator[U]:
            async for item in self:
                yield await _call(fn, item)

        return self._derive(mapped)

    def filter(self, predicate: MaybeAsync[bool]) -> "AsyncIterableCollection[T]":
        async def filtered() -> AsyncIterator[T]:
            async for item in self:
                if await _call(predicate, item):
                    yield item

        return self._derive(filtered)

    def reject(self, predicate: MaybeAsync[bool]) -> "AsyncIterableCollection[T]":
        async def rejected() -> AsyncIterator[T]:
            async for item in self:
                if not await _call(predicate, item):
                    yield item

        return self._derive(rejected)

    def flat_map(self, fn: MaybeAsync[AnyIterable[U]]) -> "AsyncIterableCollection[U]":
        async def flattened() -> AsyncIterator[U]:
            async for item in self:
                async for inner in _iterate(await _call(fn, item)):
                    yield inner

        return self._derive(flattened)

    def take(self, limit: int) -> "AsyncIterableCollection[T]":
        """First ``limit`` items; a negative limit takes from the end."""

        async def taken() -> AsyncIterator[T]:
            if limit < 0:
                for item in (await self.to_list())[limit:]:
                    yield item
                return
            if limit == 0:
                return
            count = 0
            async for item in self:
                yield item
                count += 1
                if count >= limit:
                    return

        return self._derive(taken)

    def skip(self, offset: int) -> "AsyncIterableCollection[T]":
        """Drop the first ``offset`` items; a negative offset drops from the end."""

        async def skipped() -> AsyncIterator[T]:
            if offset < 0:
                for item in (await self.to_list())[:offset]:
                    yield item
                return
            index = 0
            async for item in self:
                if index >= offset:
                    yield item
                index += 1

        return self._derive(skipped)

    def take_while(self, predicate: MaybeAsync[bool]) -> "AsyncIterableCollection[T]":
        async def taken() -> AsyncIterator[T]:
            async for item in self:
                if not await _call(predicate, item):
                    return
                yield item

        return self._derive(taken)

    def skip_while(self, predicate: MaybeAsync[bool]) -> "AsyncIterableCollection[T]":
        async def skipped() -> AsyncIterator[T]:
            skipping = True
            async for item in self:
                if skipping and await _call(predicate, item):
                    continue
                skipping = False
                yield item

        return self._derive(skipped)

    def chunk(self, size: int) -> "AsyncIterableCollection[List[T]]":
        if size < 1:
            raise ValueError("Chunk size must be at least 1")

        async def chunks() -> AsyncIterator[List[T]]:
            batch: List[T] = []
            async for item in self:
                batch.append(item)
                if len(batch) == size:
                    yield batch
                    batch = []
            if batch:
                yield batch

        return self._derive(chunks)

    def zip(self, other: AnyIterable[U]) -> "AsyncIterableCollection[Tuple[T, U]]":
        """Pair items positionally, stopping at the shorter side."""

        async def zipped() -> AsyncIterator[Tuple[T, U]]:
            left = self.__aiter__()
            right = _iterate(other).__aiter__()
            while True:
                try:
                    a = await left.__anext__()
                    b = await right.__anext__()
                except StopAsyncIteration:
                    return
                yield a, b

        return self._derive(zipped)

    def unique(
        self, key: Optional[MaybeAsync[Hashable]] = None
    ) -> "AsyncIterableCollection[T]":
        async def distinct() -> AsyncIterator[T]:
            seen = set()
            async for item in self:
                marker = await _call(key, item) if key is not None else item
                if marker in seen:
                    continue
                seen.add(marker)
                yield item

        return self._derive(distinct)

    def reverse(self) -> "AsyncIterableCollection[T]":
        async def reversed_items() -> AsyncIterator[T]:
            for item in reversed(await self.to_list()):
                yield item

        return self._derive(reversed_items)

    def sort(
        self, key: Optional[Callable[[T], Any]] = None, descending: bool = False
    ) -> "AsyncIterableCollection[T]":
        async def sorted_items() -> AsyncIterator[T]:
            for item in sorted(await self.to_list(), key=key, reverse=descending):
                yield item

        return self._derive(sorted_items)

    def append(self, items: AnyIterable[T]) -> "AsyncIterableCollection[T]":
        async def appended() -> AsyncIterator[T]:
            async for item in self:
                yield item
            async for item in _iterate(items):
                yield item

        return self._derive(appended)

    def prepend(self, items: AnyIterable[T]) -> "AsyncIterableCollection[T]":
        async def prepended() -> AsyncIterator[T]:
            async for item in _iterate(items):
                yield item
            async for item in self:
                yield item

        return self._derive(prepended)

    def tap(self, fn: MaybeAsync[Any]) -> "AsyncIterableCollection[T]":
        async def tapped() -> AsyncIterator[T]:
            async for item in self:
                await _call(fn, item)
                yield item

        return self._derive(tapped)

    def pad_start(self, length: int, fill: T) -> "AsyncIterableCollection[T]":
        async def padded() -> AsyncIterator[T]:
            items = await self.to_list()
            for _ in range(length - len(items)):
                yield fill
            for item in items:
                yield item

        return self._derive(padded)

    def pad_end(self, length: int, fill: T) -> "AsyncIterableCollection[T]":
        async def padded() -> AsyncIterator[T]:
            count = 0
            async for item in self:
                count += 1
                yield item
            for _ in range(length - count):
                yield fill

        return self._derive(padded)

    # Terminal operations

    async def reduce(self, fn: MaybeAsync[Any], initial: Any = _MISSING) -> Any:
        accumulator = initial
        async for item in self:
            if accumulator is _MISSING:
                accumulator = item
                continue
            accumulator = await _call(fn, accumulator, item)
        if accumulator is _MISSING:
            raise EmptyCollectionError("reduce")
        return accumulator

    async def to_list(self) -> List[T]:
        return [item async for item in self]

    async def count(self, predicate: Optional[MaybeAsync[bool]] = None) -> int:
        total = 0
        async for item in self:
            if predicate is None or await _call(predicate, item):
                total += 1
        return total

    async def sum(self) -> Any:
        return await self.reduce(lambda total, item: total + item, 0)

    async def average(self) -> float:
        items = await self.to_list()
        if not items:
            raise EmptyCollectionError("average")
        return sum(items) / len(items)

    async def min(self, key: Optional[Callable[[T], Any]] = None) -> T:
        items = await self.to_list()
        if not items:
            raise EmptyCollectionError("min")
        return min(items, key=key) if key is not None else min(items)

    async def max(self, key: Optional[Callable[[T], Any]] = None) -> T:
        items = await self.to_list()
        if not items:
            raise EmptyCollectionError("max")
        return max(items, key=key) if key is not None else max(items)

    async def first(
        self, predicate: Optional[MaybeAsync[bool]] = None, default: Any = None
    ) -> Any:
        async for item in self:
            if predicate is None or await _call(predicate, item):
                return item
        return default

    async def first_or_fail(self, predicate: Optional[MaybeAsync[bool]] = None) -> T:
        item = await self.first(predicate, _MISSING)
        if item is _MISSING:
            raise ItemNotFoundCollectionError()
        return item

    async def last(
        self, predicate: Optional[MaybeAsync[bool]] = None, default: Any = None
    ) -> Any:
        result = default
        async for item in self:
            if predicate is None or await _call(predicate, item):
                result = item
        return result

    async def last_or_fail(self, predicate: Optional[MaybeAsync[bool]] = None) -> T:
        item = await self.last(predicate, _MISSING)
        if item is _MISSING:
            raise ItemNotFoundCollectionError()
        return item

    async def sole(self, predicate: Optional[MaybeAsync[bool]] = None) -> T:
        matches = self.filter(predicate) if predicate is not None else self
        found = await matches.take(2).to_list()
        if not found:
            raise ItemNotFoundCollectionError()
        if len(found) > 1:
            raise MultipleItemsFoundCollectionError()
        return found[0]

    async def every(self, predicate: MaybeAsync[bool]) -> bool:
        async for item in self:
            if not await _call(predicate, item):
                return False
        return True

    async def some(self, predicate: MaybeAsync[bool]) -> bool:
        async for item in self:
            if await _call(predicate, item):
                return True
        return False

    async def is_empty(self) -> bool:
        async for _ in self:
            return False
        return True

    async def join(self, separator: str = ",") -> str:
        return separator.join([str(item) async for item in self])

    async def group_by(self, key: MaybeAsync[Hashable]) -> Dict[Hashable, List[T]]:
        groups: Dict[Hashable, List[T]] = {}
        async for item in self:
            groups.setdefault(await _call(key, item), []).append(item)
        return groups

    async def partition(
        self, predicate: MaybeAsync[bool]
    ) -> Tuple[List[T], List[T]]:
        matching: List[T] = []
        rest: List[T] = []
        async for item in self:
            (matching if await _call(predicate, item) else rest).append(item)
        return matching, rest


class _AsyncRegenerable(Generic[T]):
    """Async iterable that builds a fresh iterator from ``factory`` on every pass."""

    def __init__(self, factory: Callable[[], AsyncIterator[T]]):
        self._factory = factory

    def __aiter__(self) -> AsyncIterator[T]:
        return self._factory()
