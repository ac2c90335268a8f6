"""
Holiday rules and their resolution into concrete dates.

A rule is either a fixed day/month (``FixedHoliday``) or a date computed
from a movable anchor (``MovableHoliday``). Movable rules are members of the
``MovableRule`` enum, each expressed as an offset in days from Easter Sunday.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Tuple, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def easter_sunday(year: int) -> date:
    """
    Date of Easter Sunday in the Gregorian calendar.

    Anonymous Gregorian Computus (Meeus/Jones/Butcher).
    """
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


class MovableRule(str, Enum):
    """Holidays anchored to Easter Sunday."""

    EASTER_SUNDAY = "easter_sunday"
    EASTER_MONDAY = "easter_monday"
    GOOD_FRIDAY = "good_friday"
    ASCENSION_DAY = "ascension_day"
    WHIT_MONDAY = "whit_monday"
    CORPUS_CHRISTI = "corpus_christi"

    @property
    def offset(self) -> int:
        """Days from Easter Sunday."""
        return _EASTER_OFFSETS[self]

    @classmethod
    def parse(cls, value: Union["MovableRule", str]) -> "MovableRule":
        """
        Accept enum members and names in camelCase, PascalCase or snake_case.

        Example: "easterMonday", "EasterMonday" and "easter_monday" all
        resolve to ``MovableRule.EASTER_MONDAY``.
        """
        if isinstance(value, cls):
            return value
        key = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", str(value).strip())
        key = key.replace("-", "_").replace(" ", "_").lower()
        try:
            return cls(key)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown movable holiday rule: '{value}'") from exc


_EASTER_OFFSETS = {
    MovableRule.GOOD_FRIDAY: -2,
    MovableRule.EASTER_SUNDAY: 0,
    MovableRule.EASTER_MONDAY: 1,
    MovableRule.ASCENSION_DAY: 39,
    MovableRule.WHIT_MONDAY: 50,
    MovableRule.CORPUS_CHRISTI: 60,
}


@dataclass(frozen=True)
class FixedHoliday:
    """A holiday falling on the same day and month every year."""
    day: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ConfigurationError(f"Month must be between 1 and 12, got {self.month}")
        # 2000 is a leap year, so 29 February passes here
        try:
            date(2000, self.month, self.day)
        except ValueError as exc:
            raise ConfigurationError(
                f"No such day: {self.day}/{self.month}"
            ) from exc

    def resolve(self, year: int) -> date:
        """
        Raises:
            ValueError: If the date does not exist in ``year`` (29 February)
        """
        return date(year, self.month, self.day)


@dataclass(frozen=True)
class MovableHoliday:
    """A holiday computed from a movable anchor."""
    rule: MovableRule = MovableRule.EASTER_MONDAY

    def __post_init__(self):
        object.__setattr__(self, "rule", MovableRule.parse(self.rule))

    def resolve(self, year: int) -> date:
        return easter_sunday(year) + timedelta(days=self.rule.offset)


HolidayRule = Union[FixedHoliday, MovableHoliday]


def resolve_holidays(rules: Iterable[HolidayRule], year: int) -> FrozenSet[date]:
    """
    Resolve every rule for ``year``.

    Rules that have no date in that year are left out.
    """
    resolved = set()
    for rule in rules:
        try:
            resolved.add(rule.resolve(year))
        except ValueError as exc:
            logger.debug("Holiday %r skipped for %s: %s", rule, year, exc)
    return frozenset(resolved)


class HolidayCalendar:
    """
    The holiday rules of one calendar, resolved lazily per year.

    Membership compares day and month only, so duplicate rules collapse.
    """

    def __init__(self, rules: Iterable[HolidayRule] = ()) -> None:
        checked: List[HolidayRule] = []
        for rule in rules:
            if not isinstance(rule, (FixedHoliday, MovableHoliday)):
                raise ConfigurationError(f"Not a holiday rule: {rule!r}")
            checked.append(rule)
        self._rules: Tuple[HolidayRule, ...] = tuple(checked)
        self._keys_for_year = lru_cache(maxsize=32)(self._resolve_keys)

    @property
    def rules(self) -> Tuple[HolidayRule, ...]:
        return self._rules

    def for_year(self, year: int) -> FrozenSet[date]:
        """Concrete holiday dates in ``year``."""
        return frozenset(date(year, month, day) for month, day in self._keys_for_year(year))

    def is_holiday(self, day: date) -> bool:
        return (day.month, day.day) in self._keys_for_year(day.year)

    def _resolve_keys(self, year: int) -> FrozenSet[Tuple[int, int]]:
        return frozenset(
            (resolved.month, resolved.day)
            for resolved in resolve_holidays(self._rules, year)
        )

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"HolidayCalendar(rules={list(self._rules)!r})"


def italian_holidays() -> List[HolidayRule]:
    """Italian national holidays, with 8 December for the Immaculate Conception."""
    return [
        FixedHoliday(1, 1),
        FixedHoliday(6, 1),
        MovableHoliday(MovableRule.EASTER_MONDAY),
        FixedHoliday(25, 4),
        FixedHoliday(1, 5),
        FixedHoliday(2, 6),
        FixedHoliday(15, 8),
        FixedHoliday(1, 11),
        FixedHoliday(8, 12),
        FixedHoliday(25, 12),
        FixedHoliday(26, 12),
    ]
