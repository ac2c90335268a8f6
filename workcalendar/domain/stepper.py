"""
Adding working days, hours, minutes and durations to an instant.
"""

import logging
from datetime import timedelta

from pendulum import DateTime

from .exceptions import InvalidDurationError, InvalidStartError
from .moments import MomentClassifier

logger = logging.getLogger(__name__)


class Stepper:
    """
    Advances instants through working time.

    Every public method validates its arguments before any stepping, moves a
    start that is not a working moment to the next working moment, and only
    then counts. Results are always working moments.
    """

    def __init__(self, classifier: MomentClassifier):
        self.classifier = classifier
        self.week = classifier.week

    def add_working_days(self, start: DateTime, days: int) -> DateTime:
        """
        Add ``days`` working days, keeping the time of day.

        When the kept time of day is not a working moment on the target day
        (a gap on a day with other intervals), the result moves on to the
        next working moment.

        Raises:
            InvalidStartError: If start does not fall on a working weekday
            InvalidDurationError: If days is negative
        """
        self.check_start(start)
        if days < 0:
            raise InvalidDurationError(f"Working days must not be negative, got {days}")
        return self._normalize(self._skip_days(self._normalize(start), days))

    def add_working_minutes(self, start: DateTime, minutes: float) -> DateTime:
        """
        Add ``minutes`` of working time.

        Raises:
            InvalidStartError: If start does not fall on a working weekday
            InvalidDurationError: If minutes is negative
        """
        self.check_start(start)
        if minutes < 0:
            raise InvalidDurationError(f"Working minutes must not be negative, got {minutes}")
        return self.classifier.advance(self._normalize(start), minutes)

    def add_working_hours(self, start: DateTime, hours: float) -> DateTime:
        """
        Add ``hours`` of working time.

        On a symmetrical week whose working days share the same intervals,
        whole days are added first and the remainder as minutes. Otherwise the
        whole amount is added as minutes.

        Raises:
            InvalidStartError: If start does not fall on a working weekday
            InvalidDurationError: If hours is negative
        """
        self.check_start(start)
        if hours < 0:
            raise InvalidDurationError(f"Working hours must not be negative, got {hours}")

        current = self._normalize(start)
        requested = hours * 60
        per_day = self.week.total_working_minutes(current.weekday())

        if self.week.symmetrical and self.week.identical_days and per_day <= requested:
            days, rest = divmod(requested, per_day)
            logger.debug(
                "Adding %s hours as %d days and %s minutes", hours, int(days), rest
            )
            current = self._skip_days(current, int(days))
            if rest > 0:
                current = self.classifier.advance(current, rest)
            return current

        return self.classifier.advance(current, requested)

    def add_working_duration(self, start: DateTime, duration: timedelta) -> DateTime:
        """
        Add a positive duration of working time.

        Raises:
            InvalidDurationError: If the duration is zero or negative
            InvalidStartError: If start does not fall on a working weekday
        """
        if duration.total_seconds() <= 0:
            raise InvalidDurationError(
                f"Duration must be positive, got {duration}"
            )
        return self.add_working_minutes(start, duration.total_seconds() / 60)

    def check_start(self, start: DateTime) -> None:
        """
        Raises:
            InvalidStartError: If the weekday of start is not a working weekday
        """
        if not self.week.is_working_day(start.weekday()):
            raise InvalidStartError(
                f"Invalid start {start}: give a working day for start or check "
                f"your configuration"
            )

    def _normalize(self, start: DateTime) -> DateTime:
        is_working, following = self.classifier.find_next(start, 1)
        if is_working:
            return start
        logger.debug("Start %s is not a working moment, moved to %s", start, following)
        return following

    def _skip_days(self, start: DateTime, days: int) -> DateTime:
        current = start
        for _ in range(days):
            following = self.classifier.next_working_date(current)
            current = current.set(
                year=following.year, month=following.month, day=following.day
            )
        return current
