"""
Collection Exceptions
"""

from typing import Optional

from ..domain.errors import StowageError


class CollectionError(StowageError):
    """Base exception for collection errors."""


class ItemNotFoundCollectionError(CollectionError):
    """Raised when no item matches where one is required."""

    def __init__(self, message: str = "Item was not found"):
        super().__init__(message=message, error_code="COLLECTION_ITEM_NOT_FOUND")


class MultipleItemsFoundCollectionError(CollectionError):
    """Raised when more than one item matches where exactly one is required."""

    def __init__(self, count: Optional[int] = None):
        details = {"count": count} if count is not None else {}
        super().__init__(
            message="Multiple items were found",
            error_code="COLLECTION_MULTIPLE_ITEMS_FOUND",
            details=details,
        )


class EmptyCollectionError(CollectionError):
    """Raised by terminal operations that need at least one item."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Collection is empty, {operation} needs at least one item",
            error_code="COLLECTION_EMPTY",
            details={"operation": operation},
        )
