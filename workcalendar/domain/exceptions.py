"""
Domain-specific exception hierarchy for the working calendar.
"""


class WorkCalendarError(Exception):
    """Base class for all calendar errors."""


class ConfigurationError(WorkCalendarError):
    """Raised when a week schedule or a serialized configuration is invalid."""


class InvalidStartError(WorkCalendarError, ValueError):
    """Raised when a start instant does not fall on a configured working weekday."""


class InvalidDurationError(WorkCalendarError, ValueError):
    """Raised when an amount of time to add is not acceptable."""
