"""
Cache Exceptions

Errors raised by cache adapters and the Cache service.
"""

from typing import Optional

from ..errors import StowageError


class CacheError(StowageError):
    """Base exception for cache errors."""


class TypeCacheError(CacheError):
    """Raised when incrementing or decrementing a value that is not a number."""

    def __init__(self, key: str, original_error: Optional[BaseException] = None):
        super().__init__(
            message=f'Unable to increment or decrement none number type key "{key}"',
            error_code="CACHE_TYPE_ERROR",
            details={"key": key},
            original_error=original_error,
        )
        self.key = key


class KeyNotFoundCacheError(CacheError):
    """Raised when a key that must exist is missing."""

    def __init__(self, key: str):
        super().__init__(
            message=f'Key "{key}" is not found',
            error_code="CACHE_KEY_NOT_FOUND",
            details={"key": key},
        )
        self.key = key
