"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class DaybookError(Exception):
    """Base exception for daybook."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(DaybookError):
    """Resource not found."""

    pass


class ValidationError(DaybookError):
    """Validation error."""

    pass


class InvalidIntervalError(ValidationError):
    """Interval bounds are out of range or not strictly increasing."""

    def __init__(self, start_minute: int, end_minute: int, reason: str):
        super().__init__(
            f"Invalid interval [{start_minute}, {end_minute}): {reason}",
            details={"start_minute": start_minute, "end_minute": end_minute},
        )
        self.start_minute = start_minute
        self.end_minute = end_minute


class InvalidTimeError(ValidationError):
    """Time string is not a valid HH:MM value."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid time string: {value!r}", details={"value": value})
        self.value = value


class BusinessLogicError(DaybookError):
    """Business logic constraint violation."""

    pass


class DragRejectedError(BusinessLogicError):
    """Pointer-down on a block that cannot be dragged."""

    pass
