"""
Working-moment classification and the working clock.

``MomentClassifier`` answers whether an instant is a working moment, finds
the nearest working moments around it and advances an instant by working
minutes. Stepping is closed form: whole intervals and whole days are skipped
analytically, with results identical to advancing one minute at a time.
"""

import logging
import math
from datetime import timedelta
from typing import Optional, Tuple, Union

import pendulum
from pendulum import DateTime

from .exceptions import ConfigurationError, InvalidDurationError
from .holidays import HolidayCalendar
from .models import TimeInterval, WorkWeek, seconds_of_day

logger = logging.getLogger(__name__)

# Upper bound for any forward or backward search over calendar days.
MAX_SEARCH_DAYS = 3660

Granularity = Union[int, float]


class MomentClassifier:
    """
    Classifies instants against a work week and its holidays.

    A working moment lies inside ``[start, end)`` of one of the intervals of
    a working weekday that is not a holiday. An instant exactly on an
    interval end is never working.
    """

    def __init__(self, week: WorkWeek, holidays: HolidayCalendar):
        self.week = week
        self.holidays = holidays
        self._capacity = {
            weekday: sum(math.ceil(i.seconds / 60) for i in week.intervals_for(weekday))
            for weekday in week.working_weekdays
        }

    # ── classification ───────────────────────────────────────────────────

    def is_working_date(self, moment) -> bool:
        """True when the date of ``moment`` is a working weekday and no holiday."""
        return (
            self.week.is_working_day(moment.weekday())
            and not self.holidays.is_holiday(moment)
        )

    def is_working(self, moment: DateTime) -> bool:
        if not self.is_working_date(moment):
            return False
        return self._interval_at(moment) is not None

    def _interval_at(self, moment: DateTime) -> Optional[TimeInterval]:
        """The interval holding ``moment``, ignoring holidays."""
        clock = seconds_of_day(moment)
        for interval in self.week.intervals_for(moment.weekday()):
            if clock == interval.end_seconds:
                return None
            if interval.start_seconds <= clock < interval.end_seconds:
                return interval
        return None

    # ── searching ────────────────────────────────────────────────────────

    def find_previous(
        self, moment: DateTime, granularity: Granularity = 1
    ) -> Tuple[bool, DateTime]:
        """
        Find the previous working moment, stepping back by ``granularity`` minutes.

        Returns:
            (is_working_now, previous_working_moment). For a working moment
            the previous one is simply ``moment - granularity``.
        """
        step = self._step(granularity)

        if self.is_working(moment):
            return True, moment - step

        current = moment
        floor = moment.subtract(days=MAX_SEARCH_DAYS)
        while current > floor:
            # A wholly non-working date is skipped from its midnight
            if not self.is_working_date(current):
                current = current.start_of("day")
            current = current - step
            if self.is_working(current):
                return False, current

        raise ConfigurationError(
            f"No working moment found before {moment} with a granularity of "
            f"{granularity} minutes"
        )

    def find_next(
        self, moment: DateTime, granularity: Granularity = 1
    ) -> Tuple[bool, DateTime]:
        """
        Find the next working moment.

        Returns:
            (is_working_now, next_working_moment), where the next moment is
            ``granularity`` working minutes after ``moment`` when it is
            working, and after the previous working moment otherwise.
        """
        is_working, previous = self.find_previous(moment, granularity)
        anchor = moment if is_working else previous
        return is_working, self.advance(anchor, abs(granularity))

    def is_working_moment(
        self, moment: DateTime, granularity: Granularity = 1
    ) -> Tuple[bool, DateTime, DateTime]:
        """
        Returns:
            (is_working_now, next_working_moment, previous_working_moment)
        """
        is_working, previous = self.find_previous(moment, granularity)
        anchor = moment if is_working else previous
        return is_working, self.advance(anchor, abs(granularity)), previous

    @staticmethod
    def _step(granularity: Granularity) -> timedelta:
        if not granularity:
            raise InvalidDurationError("Granularity must be a non-zero number of minutes")
        return pendulum.duration(minutes=abs(granularity))

    # ── the working clock ────────────────────────────────────────────────

    def next_working_date(self, moment: DateTime) -> DateTime:
        """Midnight of the first working date strictly after ``moment``."""
        current = moment.start_of("day")
        for _ in range(MAX_SEARCH_DAYS):
            current = current.add(days=1)
            if self.is_working_date(current):
                return current
        raise ConfigurationError(
            f"No working day within {MAX_SEARCH_DAYS} days after {moment.to_date_string()}"
        )

    def _opening_after(self, moment: DateTime) -> Tuple[DateTime, TimeInterval]:
        """
        Start of the first interval beginning at or after ``moment``.

        An interval starting exactly at ``moment`` counts, so leaving
        09:00-13:00 at 13:00 lands on a touching 13:00-17:00 the same day.
        """
        if self.is_working_date(moment):
            clock = seconds_of_day(moment)
            for interval in self.week.intervals_for(moment.weekday()):
                if interval.start_seconds >= clock:
                    return interval.start_on(moment), interval

        day = self.next_working_date(moment)
        first = self.week.intervals_for(day.weekday())[0]
        return first.start_on(day), first

    def advance(self, moment: DateTime, minutes: Granularity) -> DateTime:
        """
        Move ``moment`` forward by ``minutes`` of working time.

        Each one-minute step either stays inside the current interval or, when
        it reaches the interval end, lands on the next interval start (later
        today or on the next working day). The gap itself is free.
        Fractional minutes count as a whole step. No validation happens here.
        """
        steps = math.ceil(minutes)
        current = moment

        interval = self._interval_at(current) if self.is_working_date(current) else None
        if interval is None:
            current, interval = self._opening_after(current)

        while steps > 0:
            weekday = current.weekday()
            intervals = self.week.intervals_for(weekday)
            capacity = self._capacity[weekday]

            if interval is intervals[0] and current == interval.start_on(current):
                if steps >= capacity:
                    steps -= capacity
                    current, interval = self._opening_after(current.end_of("day"))
                    continue

            room = math.ceil((interval.end_seconds - seconds_of_day(current)) / 60)
            if steps < room:
                return current.add(minutes=steps)

            steps -= room
            current, interval = self._opening_after(interval.end_on(current))

        return current
