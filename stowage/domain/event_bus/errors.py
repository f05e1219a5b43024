"""
Event Bus Exceptions
"""

from typing import Optional

from ..errors import StowageError


class EventBusError(StowageError):
    """Base exception for event bus errors."""


class DispatchEventBusError(EventBusError):
    """Raised when an event could not be dispatched."""

    def __init__(self, event_name: str, original_error: Optional[BaseException] = None):
        super().__init__(
            message=f'Failed to dispatch event "{event_name}"',
            error_code="EVENT_BUS_DISPATCH_ERROR",
            details={"event_name": event_name},
            original_error=original_error,
        )


class AddListenerEventBusError(EventBusError):
    """Raised when a listener could not be registered."""

    def __init__(self, event_name: str, original_error: Optional[BaseException] = None):
        super().__init__(
            message=f'Failed to add listener for event "{event_name}"',
            error_code="EVENT_BUS_ADD_LISTENER_ERROR",
            details={"event_name": event_name},
            original_error=original_error,
        )


class RemoveListenerEventBusError(EventBusError):
    """Raised when a listener could not be unregistered."""

    def __init__(self, event_name: str, original_error: Optional[BaseException] = None):
        super().__init__(
            message=f'Failed to remove listener for event "{event_name}"',
            error_code="EVENT_BUS_REMOVE_LISTENER_ERROR",
            details={"event_name": event_name},
            original_error=original_error,
        )
