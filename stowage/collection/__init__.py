"""
Collections

Lazy, chainable wrappers over sync and async iterables.
"""

from .async_iterable_collection import AsyncIterableCollection
from .errors import (
    CollectionError,
    EmptyCollectionError,
    ItemNotFoundCollectionError,
    MultipleItemsFoundCollectionError,
)
from .iterable_collection import IterableCollection

__all__ = [
    "AsyncIterableCollection",
    "IterableCollection",
    "CollectionError",
    "EmptyCollectionError",
    "ItemNotFoundCollectionError",
    "MultipleItemsFoundCollectionError",
]
