"""
Stowage Domain Exceptions

Domain-specific exceptions shared by every adapter family.
Follows project standards for error handling without fallbacks.
"""

from typing import Any, Dict, Optional


class StowageError(Exception):
    """Base exception for all stowage errors.

    Carries a stable error code and a details dict for diagnostics.
    Never swallow these - always preserve context.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[BaseException] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        if original_error is not None:
            self.details["original_error"] = str(original_error)
            self.details["original_error_type"] = type(original_error).__name__
        super().__init__(self.message)
        # Preserve exception context for debugging (exception chaining)
        if original_error is not None:
            self.__cause__ = original_error
