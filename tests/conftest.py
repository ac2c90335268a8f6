"""
Shared pytest fixtures for the working calendar tests.
"""

from datetime import time

import pytest

from workcalendar.domain.holidays import FixedHoliday, MovableHoliday, MovableRule, italian_holidays
from workcalendar.domain.models import TimeInterval, Weekday, WorkWeek
from workcalendar.services.working_calendar import WorkingCalendar

WEEKDAYS = [
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
]


@pytest.fixture
def split_day():
    """09:00-13:00 and 14:00-18:00, eight working hours."""
    return [
        TimeInterval(start=time(9, 0), end=time(13, 0)),
        TimeInterval(start=time(14, 0), end=time(18, 0)),
    ]


@pytest.fixture
def simple_week(split_day):
    """Monday to Friday, split eight-hour days."""
    return WorkWeek.uniform(WEEKDAYS, split_day)


@pytest.fixture
def calendar(simple_week):
    """Simple week without holidays."""
    return WorkingCalendar(simple_week, [])


@pytest.fixture
def italian_calendar(simple_week):
    """Simple week with the Italian national holidays."""
    return WorkingCalendar(simple_week, italian_holidays())


@pytest.fixture
def mid_june_calendar(simple_week):
    """Simple week with 17 and 18 June off, plus Easter Monday."""
    return WorkingCalendar(
        simple_week,
        [
            FixedHoliday(day=17, month=6),
            FixedHoliday(day=18, month=6),
            MovableHoliday(MovableRule.EASTER_MONDAY),
        ],
    )


@pytest.fixture
def short_friday_week():
    """Monday to Thursday 09:00-17:00, Friday 09:00-13:00."""
    full = [TimeInterval(start=time(9, 0), end=time(17, 0))]
    return WorkWeek({
        Weekday.MONDAY: full,
        Weekday.TUESDAY: full,
        Weekday.WEDNESDAY: full,
        Weekday.THURSDAY: full,
        Weekday.FRIDAY: [TimeInterval(start=time(9, 0), end=time(13, 0))],
    })


@pytest.fixture
def shifted_tuesday_week(split_day):
    """Eight hours on both days, but Monday 09-13/14-18 and Tuesday 08-16."""
    return WorkWeek({
        Weekday.MONDAY: split_day,
        Weekday.TUESDAY: [TimeInterval(start=time(8, 0), end=time(16, 0))],
    })


@pytest.fixture
def touching_week():
    """Monday to Friday, 09:00-13:00 followed directly by 13:00-17:00."""
    return WorkWeek.uniform(
        WEEKDAYS,
        [
            TimeInterval(start=time(9, 0), end=time(13, 0)),
            TimeInterval(start=time(13, 0), end=time(17, 0)),
        ],
    )
