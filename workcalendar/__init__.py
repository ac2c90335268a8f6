"""
workcalendar - working-day and working-time arithmetic.

Basic usage::

    import pendulum
    from datetime import time
    from workcalendar import TimeInterval, WorkWeek, WorkingCalendar, italian_holidays

    week = WorkWeek.uniform(
        ["monday", "tuesday", "wednesday", "thursday", "friday"],
        [TimeInterval(time(9), time(13)), TimeInterval(time(14), time(18))],
    )
    calendar = WorkingCalendar(week, italian_holidays())
    calendar.add_working_days(pendulum.naive(2015, 6, 1, 9), 3)   # 2015-06-05 09:00
"""

from .config import CalendarConfig
from .domain import (
    ConfigurationError,
    FixedHoliday,
    InvalidDurationError,
    InvalidStartError,
    MovableHoliday,
    MovableRule,
    TimeInterval,
    Weekday,
    WorkCalendarError,
    WorkWeek,
    italian_holidays,
)
from .services import WorkingCalendar, try_parse_config

__version__ = "0.1.0"

__all__ = [
    "CalendarConfig",
    "ConfigurationError",
    "FixedHoliday",
    "InvalidDurationError",
    "InvalidStartError",
    "MovableHoliday",
    "MovableRule",
    "TimeInterval",
    "Weekday",
    "WorkCalendarError",
    "WorkWeek",
    "WorkingCalendar",
    "italian_holidays",
    "try_parse_config",
]
