"""
The working calendar service.

``WorkingCalendar`` owns one work week and one set of holiday rules and
exposes the public query surface. It wires the domain components together:
the ``MomentClassifier`` decides what is working time, the ``Stepper`` adds
days, hours and minutes, and the ``RangeEnumerator`` lists working days.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from pendulum import Date, DateTime

from ..config import CalendarConfig
from ..domain.exceptions import ConfigurationError
from ..domain.holidays import HolidayCalendar, HolidayRule
from ..domain.models import WorkWeek, to_moment
from ..domain.moments import Granularity, MomentClassifier
from ..domain.ranges import RangeEnumerator
from ..domain.stepper import Stepper

logger = logging.getLogger(__name__)

Instant = Union[datetime, date]


class WorkingCalendar:
    """
    Working-time arithmetic over a weekly schedule and holidays.

    The week and the holiday rules are copied at construction; an instance
    never changes afterwards and can be shared between threads.
    """

    def __init__(
        self,
        week: Union[WorkWeek, Mapping],
        holidays: Iterable[HolidayRule] = (),
    ) -> None:
        """
        Args:
            week: A WorkWeek, or a mapping of weekday to TimeInterval lists
            holidays: Holiday rules; copied into an immutable tuple

        Raises:
            ConfigurationError: If the week has no working day or is malformed
        """
        if week is None:
            raise ConfigurationError("Week configuration mandatory")
        self._week = week if isinstance(week, WorkWeek) else WorkWeek(week)
        self._holidays = HolidayCalendar(holidays)

        self._classifier = MomentClassifier(self._week, self._holidays)
        self._stepper = Stepper(self._classifier)
        self._ranges = RangeEnumerator(self._classifier)

    @classmethod
    def from_config(cls, config: Union[CalendarConfig, Mapping]) -> "WorkingCalendar":
        """
        Build a calendar from a ``CalendarConfig`` or a mapping of the same shape.

        Raises:
            ConfigurationError: If the configuration is malformed
        """
        if not isinstance(config, CalendarConfig):
            config = CalendarConfig.from_mapping(config)
        return cls(config.build_week(), config.build_holidays())

    @classmethod
    def from_yaml(cls, config_path: Path) -> "WorkingCalendar":
        """
        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the configuration is malformed
        """
        return cls.from_config(CalendarConfig.load_from_yaml(Path(config_path)))

    @property
    def week(self) -> WorkWeek:
        return self._week

    @property
    def holiday_rules(self) -> Tuple[HolidayRule, ...]:
        return self._holidays.rules

    # ── arithmetic ───────────────────────────────────────────────────────

    def add_working_days(self, instant: Instant, days: int) -> DateTime:
        """First working moment ``days`` working days after ``instant``."""
        return self._stepper.add_working_days(to_moment(instant), days)

    def add_working_hours(self, instant: Instant, hours: float) -> DateTime:
        return self._stepper.add_working_hours(to_moment(instant), hours)

    def add_working_minutes(self, instant: Instant, minutes: float) -> DateTime:
        return self._stepper.add_working_minutes(to_moment(instant), minutes)

    def add_working_duration(self, instant: Instant, duration: timedelta) -> DateTime:
        return self._stepper.add_working_duration(to_moment(instant), duration)

    # ── classification ───────────────────────────────────────────────────

    def is_working_moment(
        self, instant: Instant, granularity: Granularity = 1
    ) -> Tuple[bool, DateTime, DateTime]:
        """
        Returns:
            (is_working, next_working_moment, previous_working_moment)
        """
        return self._classifier.is_working_moment(to_moment(instant), granularity)

    def previous_working_moment(
        self, instant: Instant, granularity: Granularity = 1
    ) -> Tuple[bool, DateTime]:
        """
        Returns:
            (is_working, previous_working_moment)
        """
        return self._classifier.find_previous(to_moment(instant), granularity)

    def next_working_moment(
        self, instant: Instant, granularity: Granularity = 1
    ) -> Tuple[bool, DateTime]:
        """
        Returns:
            (is_working, next_working_moment)
        """
        return self._classifier.find_next(to_moment(instant), granularity)

    def is_working_day(self, day: Instant) -> bool:
        """True for a working weekday that is not a holiday."""
        return self._classifier.is_working_date(to_moment(day))

    def holidays_for(self, year: int) -> FrozenSet[date]:
        return self._holidays.for_year(year)

    # ── ranges ───────────────────────────────────────────────────────────

    def working_days_between(
        self, start: Instant, end: Instant, include_ends: bool = True
    ) -> List[Date]:
        """Working dates between start and end, latest first."""
        return self._ranges.working_days_between(
            to_moment(start), to_moment(end), include_ends=include_ends
        )

    def __repr__(self) -> str:
        return f"WorkingCalendar(week={self._week!r}, holidays={len(self._holidays)})"


def try_parse_config(config: Union[str, Mapping, CalendarConfig]) -> Optional[WorkingCalendar]:
    """
    Build a calendar from YAML text, a mapping or a config model.

    Returns:
        The calendar, or None when the configuration is malformed
    """
    try:
        if isinstance(config, str):
            config = CalendarConfig.loads(config)
        return WorkingCalendar.from_config(config)
    except ConfigurationError as exc:
        logger.debug("Calendar configuration rejected: %s", exc)
        return None
