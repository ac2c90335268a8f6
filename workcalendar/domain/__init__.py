"""
Domain layer - Pure calendar arithmetic without I/O.
"""

from .exceptions import (
    ConfigurationError,
    InvalidDurationError,
    InvalidStartError,
    WorkCalendarError,
)
from .holidays import (
    FixedHoliday,
    HolidayCalendar,
    HolidayRule,
    MovableHoliday,
    MovableRule,
    easter_sunday,
    italian_holidays,
    resolve_holidays,
)
from .models import TimeInterval, Weekday, WorkWeek
from .moments import MomentClassifier
from .ranges import RangeEnumerator
from .stepper import Stepper

__all__ = [
    "ConfigurationError",
    "InvalidDurationError",
    "InvalidStartError",
    "WorkCalendarError",
    "FixedHoliday",
    "HolidayCalendar",
    "HolidayRule",
    "MovableHoliday",
    "MovableRule",
    "easter_sunday",
    "italian_holidays",
    "resolve_holidays",
    "TimeInterval",
    "Weekday",
    "WorkWeek",
    "MomentClassifier",
    "RangeEnumerator",
    "Stepper",
]
