"""
Domain models for the weekly work schedule.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import IntEnum
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple, Union

import pendulum
from pendulum import DateTime

from .exceptions import ConfigurationError


class Weekday(IntEnum):
    """Day of the week, numbered like pendulum's ``day_of_week`` (0=Monday)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: Union["Weekday", int, str]) -> "Weekday":
        """
        Accept a member, an index (0-6) or a case-insensitive name.

        Raises:
            ConfigurationError: If the value names no weekday
        """
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdigit():
                value = int(key)
            else:
                raise ConfigurationError(f"Unknown weekday: '{value}'")
        try:
            return cls(int(value))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Unknown weekday: {value!r}") from exc


def seconds_of_day(value: Union[time, datetime]) -> float:
    """Seconds elapsed since midnight, microseconds included."""
    return (
        value.hour * 3600
        + value.minute * 60
        + value.second
        + value.microsecond / 1_000_000
    )


def to_moment(value: Union[datetime, date]) -> DateTime:
    """
    Convert a datetime or date to a pendulum DateTime.

    The caller's tzinfo is kept as is: naive values stay naive.
    """
    if isinstance(value, datetime):
        return pendulum.instance(value, tz=None)
    if isinstance(value, date):
        return pendulum.naive(value.year, value.month, value.day)
    raise TypeError(f"Expected a datetime or date, got {type(value).__name__}")


@dataclass(frozen=True)
class TimeInterval:
    """
    A span of working time within a single day.

    Invariant: start must be before end; second resolution only.
    """
    start: time
    end: time

    def __post_init__(self):
        for value in (self.start, self.end):
            if not isinstance(value, time):
                raise ConfigurationError(f"Interval bounds must be times, got {value!r}")
            if value.tzinfo is not None:
                raise ConfigurationError("Interval bounds must not carry a timezone")
            if value.microsecond:
                raise ConfigurationError(
                    f"Interval bounds have second resolution, got {value.isoformat()}"
                )
        if self.start >= self.end:
            raise ConfigurationError(
                f"Start time {self.start} must be before end time {self.end}"
            )

    @property
    def start_seconds(self) -> int:
        return int(seconds_of_day(self.start))

    @property
    def end_seconds(self) -> int:
        return int(seconds_of_day(self.end))

    @property
    def seconds(self) -> int:
        return self.end_seconds - self.start_seconds

    def duration_minutes(self) -> float:
        """Return the length in minutes (fractional when seconds are used)."""
        return self.seconds / 60

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps with another."""
        return self.start < other.end and self.end > other.start

    def start_on(self, moment: DateTime) -> DateTime:
        """The interval start on the day of ``moment``."""
        return moment.set(
            hour=self.start.hour,
            minute=self.start.minute,
            second=self.start.second,
            microsecond=0,
        )

    def end_on(self, moment: DateTime) -> DateTime:
        """The interval end on the day of ``moment``."""
        return moment.set(
            hour=self.end.hour,
            minute=self.end.minute,
            second=self.end.second,
            microsecond=0,
        )

    def __str__(self) -> str:
        return f"{self.start.strftime('%H:%M:%S')}-{self.end.strftime('%H:%M:%S')}"


def _normalize_intervals(
    weekday: Weekday, intervals: Iterable[TimeInterval]
) -> Tuple[TimeInterval, ...]:
    """
    Sort a day's intervals and reject overlaps.

    Touching intervals (09:00-13:00, 13:00-17:00) are kept apart: the shared
    instant is the end of the first one and is not a working moment.
    """
    intervals = list(intervals)
    for current in intervals:
        if not isinstance(current, TimeInterval):
            raise ConfigurationError(
                f"{weekday.name.title()}: expected TimeInterval, got {current!r}"
            )

    ordered = sorted(intervals, key=lambda i: (i.start, i.end))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.overlaps(current):
            raise ConfigurationError(
                f"{weekday.name.title()}: interval {current} overlaps {previous}"
            )

    return tuple(ordered)


class WorkWeek:
    """
    Validated weekly schedule: weekday -> ordered working intervals.

    Weekdays that are absent or map to no intervals are non-working days.
    The schedule is copied at construction and cannot be changed afterwards.
    """

    def __init__(
        self,
        days: Mapping[Union[Weekday, int, str], Iterable[TimeInterval]],
    ) -> None:
        if not isinstance(days, Mapping):
            raise ConfigurationError("Week configuration must be a mapping of weekdays")

        schedule: dict[Weekday, Tuple[TimeInterval, ...]] = {
            weekday: () for weekday in Weekday
        }
        seen: set[Weekday] = set()
        for key, intervals in days.items():
            weekday = Weekday.parse(key)
            if weekday in seen:
                raise ConfigurationError(f"Duplicate weekday in configuration: {weekday.name.title()}")
            seen.add(weekday)
            schedule[weekday] = _normalize_intervals(weekday, intervals or ())

        self._days = MappingProxyType(schedule)
        self.validate()

        self._working_weekdays = frozenset(
            weekday for weekday, intervals in schedule.items() if intervals
        )
        self._totals = MappingProxyType({
            weekday: sum(i.duration_minutes() for i in intervals)
            for weekday, intervals in schedule.items()
        })
        totals = {self._totals[weekday] for weekday in self._working_weekdays}
        self._symmetrical = len(totals) == 1 and next(iter(totals)) > 0
        layouts = {schedule[weekday] for weekday in self._working_weekdays}
        self._identical_days = len(layouts) == 1

    @classmethod
    def uniform(
        cls,
        weekdays: Iterable[Union[Weekday, int, str]],
        intervals: Iterable[TimeInterval],
    ) -> "WorkWeek":
        """Build a week where every listed weekday has the same intervals."""
        shared = tuple(intervals)
        return cls({weekday: shared for weekday in weekdays})

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If no weekday carries at least one interval
        """
        if not any(self._days.values()):
            raise ConfigurationError(
                "Week without working days defined, check your configuration"
            )

    @property
    def working_weekdays(self) -> frozenset:
        return self._working_weekdays

    @property
    def symmetrical(self) -> bool:
        """True when every working weekday holds the same working minutes."""
        return self._symmetrical

    @property
    def identical_days(self) -> bool:
        """True when every working weekday has exactly the same intervals."""
        return self._identical_days

    def is_working_day(self, weekday: Union[Weekday, int]) -> bool:
        return Weekday(int(weekday)) in self._working_weekdays

    def intervals_for(self, weekday: Union[Weekday, int]) -> Tuple[TimeInterval, ...]:
        """Intervals of a weekday, sorted by start."""
        return self._days[Weekday(int(weekday))]

    def total_working_minutes(self, weekday: Union[Weekday, int]) -> float:
        return self._totals[Weekday(int(weekday))]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkWeek):
            return NotImplemented
        return dict(self._days) == dict(other._days)

    def __hash__(self) -> int:
        return hash(tuple(self._days.items()))

    def __repr__(self) -> str:
        days = ", ".join(
            f"{weekday.name.title()}: [{', '.join(str(i) for i in intervals)}]"
            for weekday, intervals in self._days.items()
            if intervals
        )
        return f"WorkWeek({days}, symmetrical={self._symmetrical})"
