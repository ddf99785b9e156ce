"""Error types for ghostcal.

All failures raised by the calendar core and the activity sources derive
from :class:`GhostcalError` so callers can present them uniformly.
"""

from typing import Any, List, Optional, Sequence


class GhostcalError(Exception):
    """Base exception for all ghostcal errors."""

    def __str__(self) -> str:
        return self.args[0] if self.args else "An error occurred in ghostcal"


class EmptyInputError(GhostcalError):
    """Raised when there is no activity to build a grid or header from.

    This is a "no data" outcome rather than a failure; the CLI reports it and
    exits cleanly.
    """


class InvalidHoursError(GhostcalError, ValueError):
    """Raised when an hours value is negative or not a finite number."""

    def __init__(self, message: str, hours: Any = None):
        super().__init__(message)
        self.hours = hours


class InvalidActivityError(GhostcalError, ValueError):
    """Raised when an activity date key cannot be parsed."""

    def __init__(self, message: str, key: Any = None):
        super().__init__(message)
        self.key = key


class DataUnavailableError(GhostcalError):
    """Raised when no activity source produced usable data."""

    def __init__(self, message: str, attempts: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.attempts: List[str] = list(attempts or [])


__all__ = [
    "GhostcalError",
    "EmptyInputError",
    "InvalidHoursError",
    "InvalidActivityError",
    "DataUnavailableError",
]
