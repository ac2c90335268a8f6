"""
Enumerating working days between two instants.
"""

from typing import Dict, List, Tuple

from pendulum import Date, DateTime

from .exceptions import InvalidStartError
from .moments import MomentClassifier


class RangeEnumerator:
    """Lists the working days of a span, latest first."""

    def __init__(self, classifier: MomentClassifier):
        self.classifier = classifier

    def working_days_between(
        self,
        start: DateTime,
        end: DateTime,
        include_ends: bool = True,
    ) -> List[Date]:
        """
        Collect working dates between start and end.

        The bounds are swapped when start is after end. With ``include_ends``
        the two endpoint dates are part of the result whatever they are.

        Returns:
            De-duplicated dates ordered by date descending

        Raises:
            InvalidStartError: If the earlier bound is not on a working weekday
        """
        if start > end:
            start, end = end, start

        if not self.classifier.week.is_working_day(start.weekday()):
            raise InvalidStartError(
                f"Invalid start {start}: give a working day for start or check "
                f"your configuration"
            )

        collected: Dict[Tuple[int, int, int], Date] = {}

        def collect(day: Date) -> None:
            collected[(day.year, day.month, day.day)] = day

        if include_ends:
            collect(start.date())
            collect(end.date())

        last = end.date()
        current = start
        while current.date() < last:
            current = self.classifier.next_working_date(current)
            if current.date() < last:
                collect(current.date())

        return [collected[key] for key in sorted(collected, reverse=True)]
