"""
Serde Exceptions
"""

from typing import Optional

from ..errors import StowageError


class SerdeError(StowageError):
    """Base exception for serde errors."""


class SerializationError(SerdeError):
    """Raised when a value cannot be serialized."""

    def __init__(self, original_error: Optional[BaseException] = None):
        super().__init__(
            message=f'Serialization error "{original_error}" occurred',
            error_code="SERDE_SERIALIZATION_ERROR",
            original_error=original_error,
        )


class DeserializationError(SerdeError):
    """Raised when a payload cannot be deserialized."""

    def __init__(self, original_error: Optional[BaseException] = None):
        super().__init__(
            message=f'Deserialization error "{original_error}" occurred',
            error_code="SERDE_DESERIALIZATION_ERROR",
            original_error=original_error,
        )
