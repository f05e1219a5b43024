"""
TimeSpan Value Object

Immutable duration used for cache TTLs, timeouts and delays.
Stored internally in milliseconds.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True, order=True)
class TimeSpan:
    """
    Immutable duration value object.

    Provides type-safe duration handling with validation and
    conversion to the units the backing stores expect.
    """

    milliseconds: float

    def __post_init__(self) -> None:
        """Validate duration value."""
        if self.milliseconds < 0:
            raise ValueError("TimeSpan cannot be negative")

    @classmethod
    def from_milliseconds(cls, milliseconds: Number) -> "TimeSpan":
        """Create TimeSpan from milliseconds."""
        return cls(milliseconds)

    @classmethod
    def from_seconds(cls, seconds: Number) -> "TimeSpan":
        """Create TimeSpan from seconds."""
        return cls(seconds * 1000)

    @classmethod
    def from_minutes(cls, minutes: Number) -> "TimeSpan":
        """Create TimeSpan from minutes."""
        return cls.from_seconds(minutes * 60)

    @classmethod
    def from_hours(cls, hours: Number) -> "TimeSpan":
        """Create TimeSpan from hours."""
        return cls.from_minutes(hours * 60)

    @classmethod
    def from_days(cls, days: Number) -> "TimeSpan":
        """Create TimeSpan from days."""
        return cls.from_hours(days * 24)

    @classmethod
    def from_timedelta(cls, value: timedelta) -> "TimeSpan":
        """Create TimeSpan from a datetime.timedelta."""
        return cls(value.total_seconds() * 1000)

    def to_milliseconds(self) -> int:
        """Whole milliseconds, never less than 1 for a non-zero span."""
        if self.milliseconds == 0:
            return 0
        return max(1, round(self.milliseconds))

    def to_seconds(self) -> float:
        return self.milliseconds / 1000

    def to_minutes(self) -> float:
        return self.to_seconds() / 60

    def to_hours(self) -> float:
        return self.to_minutes() / 60

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.milliseconds)

    def add(self, other: "TimeSpan") -> "TimeSpan":
        return TimeSpan(self.milliseconds + other.milliseconds)

    def subtract(self, other: "TimeSpan") -> "TimeSpan":
        """Subtract another span, clamping at zero."""
        return TimeSpan(max(0, self.milliseconds - other.milliseconds))

    def multiply(self, factor: Number) -> "TimeSpan":
        return TimeSpan(self.milliseconds * factor)

    def divide(self, divisor: Number) -> "TimeSpan":
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide a TimeSpan by zero")
        return TimeSpan(self.milliseconds / divisor)

    def __str__(self) -> str:
        return f"{self.to_milliseconds()}ms"
