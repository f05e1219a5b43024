"""
Lazy Iterable Collection

Chainable wrapper over any iterable. Operators build a new collection and
run nothing; items are pulled only by iteration or a terminal method.
"""

import itertools
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from .errors import (
    EmptyCollectionError,
    ItemNotFoundCollectionError,
    MultipleItemsFoundCollectionError,
)

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K", bound=Hashable)

_MISSING: Any = object()


class IterableCollection(Generic[T]):
    """
    Lazy collection over a synchronous iterable.

    The collection is as re-iterable as its source: a list can be walked
    any number of times, a generator only once.
    """

    def __init__(self, source: Iterable[T] = ()):
        self._source = source

    def __iter__(self) -> Iterator[T]:
        return iter(self._source)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source!r})"

    def _derive(self, factory: Callable[[], Iterator[U]]) -> "IterableCollection[U]":
        return IterableCollection(_Regenerable(factory))

    # Operators

    def map(self, fn: Callable[[T], U]) -> "IterableCollection[U]":
        return self._derive(lambda: (fn(item) for item in self))

    def filter(self, predicate: Callable[[T], bool]) -> "IterableCollection[T]":
        return self._derive(lambda: (item for item in self if predicate(item)))

    def reject(self, predicate: Callable[[T], bool]) -> "IterableCollection[T]":
        return self._derive(lambda: (item for item in self if not predicate(item)))

    def flat_map(self, fn: Callable[[T], Iterable[U]]) -> "IterableCollection[U]":
        return self._derive(
            lambda: (inner for item in self for inner in fn(item))
        )

    def take(self, limit: int) -> "IterableCollection[T]":
        """First ``limit`` items; a negative limit takes from the end."""
        if limit < 0:
            return self._derive(lambda: iter(list(self)[limit:]))
        return self._derive(lambda: itertools.islice(self, limit))

    def skip(self, offset: int) -> "IterableCollection[T]":
        """Drop the first ``offset`` items; a negative offset drops from the end."""
        if offset < 0:
            return self._derive(lambda: iter(list(self)[:offset]))
        return self._derive(lambda: itertools.islice(self, offset, None))

    def take_while(self, predicate: Callable[[T], bool]) -> "IterableCollection[T]":
        return self._derive(lambda: itertools.takewhile(predicate, self))

    def skip_while(self, predicate: Callable[[T], bool]) -> "IterableCollection[T]":
        return self._derive(lambda: itertools.dropwhile(predicate, self))

    def chunk(self, size: int) -> "IterableCollection[List[T]]":
        if size < 1:
            raise ValueError("Chunk size must be at least 1")

        def chunks() -> Iterator[List[T]]:
            iterator = iter(self)
            while True:
                batch = list(itertools.islice(iterator, size))
                if not batch:
                    return
                yield batch

        return self._derive(chunks)

    def zip(self, other: Iterable[U]) -> "IterableCollection[Tuple[T, U]]":
        """Pair items positionally, stopping at the shorter side."""
        return self._derive(lambda: zip(self, other))

    def unique(
        self, key: Optional[Callable[[T], Hashable]] = None
    ) -> "IterableCollection[T]":
        """Keep the first item of every distinct ``key(item)``."""

        def distinct() -> Iterator[T]:
            seen = set()
            for item in self:
                marker = key(item) if key is not None else item
                if marker in seen:
                    continue
                seen.add(marker)
                yield item

        return self._derive(distinct)

    def reverse(self) -> "IterableCollection[T]":
        return self._derive(lambda: reversed(list(self)))

    def sort(
        self, key: Optional[Callable[[T], Any]] = None, descending: bool = False
    ) -> "IterableCollection[T]":
        return self._derive(lambda: iter(sorted(self, key=key, reverse=descending)))

    def append(self, items: Iterable[T]) -> "IterableCollection[T]":
        return self._derive(lambda: itertools.chain(self, items))

    def prepend(self, items: Iterable[T]) -> "IterableCollection[T]":
        return self._derive(lambda: itertools.chain(items, self))

    def tap(self, fn: Callable[[T], Any]) -> "IterableCollection[T]":
        """Call ``fn`` on every item as it passes through."""

        def tapped() -> Iterator[T]:
            for item in self:
                fn(item)
                yield item

        return self._derive(tapped)

    def pad_start(self, length: int, fill: T) -> "IterableCollection[T]":
        def padded() -> Iterator[T]:
            items = list(self)
            yield from itertools.repeat(fill, max(0, length - len(items)))
            yield from items

        return self._derive(padded)

    def pad_end(self, length: int, fill: T) -> "IterableCollection[T]":
        def padded() -> Iterator[T]:
            count = 0
            for item in self:
                count += 1
                yield item
            yield from itertools.repeat(fill, max(0, length - count))

        return self._derive(padded)

    # Terminal operations

    def reduce(self, fn: Callable[[Any, T], Any], initial: Any = _MISSING) -> Any:
        iterator = iter(self)
        if initial is _MISSING:
            try:
                accumulator = next(iterator)
            except StopIteration:
                raise EmptyCollectionError("reduce") from None
        else:
            accumulator = initial
        for item in iterator:
            accumulator = fn(accumulator, item)
        return accumulator

    def to_list(self) -> List[T]:
        return list(self)

    def count(self, predicate: Optional[Callable[[T], bool]] = None) -> int:
        if predicate is None:
            return sum(1 for _ in self)
        return sum(1 for item in self if predicate(item))

    def sum(self) -> Any:
        return self.reduce(lambda total, item: total + item, 0)

    def average(self) -> float:
        total = 0
        count = 0
        for item in self:
            total += item
            count += 1
        if count == 0:
            raise EmptyCollectionError("average")
        return total / count

    def min(self, key: Optional[Callable[[T], Any]] = None) -> T:
        items = list(self)
        if not items:
            raise EmptyCollectionError("min")
        return min(items, key=key) if key is not None else min(items)

    def max(self, key: Optional[Callable[[T], Any]] = None) -> T:
        items = list(self)
        if not items:
            raise EmptyCollectionError("max")
        return max(items, key=key) if key is not None else max(items)

    def first(
        self, predicate: Optional[Callable[[T], bool]] = None, default: Any = None
    ) -> Any:
        for item in self:
            if predicate is None or predicate(item):
                return item
        return default

    def first_or_fail(self, predicate: Optional[Callable[[T], bool]] = None) -> T:
        item = self.first(predicate, _MISSING)
        if item is _MISSING:
            raise ItemNotFoundCollectionError()
        return item

    def last(
        self, predicate: Optional[Callable[[T], bool]] = None, default: Any = None
    ) -> Any:
        result = default
        for item in self:
            if predicate is None or predicate(item):
                result = item
        return result

    def last_or_fail(self, predicate: Optional[Callable[[T], bool]] = None) -> T:
        item = self.last(predicate, _MISSING)
        if item is _MISSING:
            raise ItemNotFoundCollectionError()
        return item

    def sole(self, predicate: Optional[Callable[[T], bool]] = None) -> T:
        """The only matching item. Fails when none or several match."""
        matches = self.filter(predicate) if predicate is not None else self
        found = list(itertools.islice(matches, 2))
        if not found:
            raise ItemNotFoundCollectionError()
        if len(found) > 1:
            raise MultipleItemsFoundCollectionError()
        return found[0]

    def every(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(item) for item in self)

    def some(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(item) for item in self)

    def is_empty(self) -> bool:
        for _ in self:
            return False
        return True

    def join(self, separator: str = ",") -> str:
        return separator.join(str(item) for item in self)

    def group_by(self, key: Callable[[T], K]) -> Dict[K, List[T]]:
        groups: Dict[K, List[T]] = {}
        for item in self:
            groups.setdefault(key(item), []).append(item)
        return groups

    def partition(self, predicate: Callable[[T], bool]) -> Tuple[List[T], List[T]]:
        """Split into (matching, not matching) preserving order."""
        matching: List[T] = []
        rest: List[T] = []
        for item in self:
            (matching if predicate(item) else rest).append(item)
        return matching, rest


class _Regenerable(Generic[T]):
    """Iterable that builds a fresh iterator from ``factory`` on every pass."""

    def __init__(self, factory: Callable[[], Iterator[T]]):
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        return self._factory()
