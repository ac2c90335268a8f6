"""
Tests for the WorkingCalendar service.
"""

from datetime import date, time

import pendulum
import pytest

from workcalendar.config import CalendarConfig
from workcalendar.domain.exceptions import ConfigurationError, InvalidStartError
from workcalendar.domain.holidays import FixedHoliday, MovableHoliday
from workcalendar.domain.models import TimeInterval, Weekday
from workcalendar.services.working_calendar import WorkingCalendar, try_parse_config

VALID_CONFIG = """
week:
  monday: [{start: "09:00", end: "13:00"}, {start: "14:00", end: "18:00"}]
  tuesday: [{start: "09:00", end: "13:00"}, {start: "14:00", end: "18:00"}]
holidays:
  - {kind: fixed, day: 1, month: 1}
  - {kind: movable, rule: easterMonday}
"""


class TestConstruction:
    """Tests for building a calendar."""

    def test_missing_week_rejected(self):
        with pytest.raises(ConfigurationError, match="Week configuration mandatory"):
            WorkingCalendar(None)

    def test_week_from_mapping(self, split_day):
        calendar = WorkingCalendar({"monday": split_day}, [FixedHoliday(1, 1)])

        assert calendar.week.working_weekdays == frozenset([Weekday.MONDAY])
        assert calendar.holiday_rules == (FixedHoliday(1, 1),)

    def test_empty_week_rejected(self):
        with pytest.raises(ConfigurationError):
            WorkingCalendar({"monday": []})

    def test_configuration_is_copied(self, split_day):
        """Changing the inputs after construction has no effect."""
        holidays = [FixedHoliday(day=16, month=6)]
        calendar = WorkingCalendar({"tuesday": split_day}, holidays)

        holidays.append(FixedHoliday(day=23, month=6))
        split_day.append(TimeInterval(start=time(19, 0), end=time(20, 0)))

        assert not calendar.is_working_day(pendulum.naive(2015, 6, 16))
        assert calendar.is_working_day(pendulum.naive(2015, 6, 23))
        assert not calendar.is_working_moment(pendulum.naive(2015, 6, 23, 19, 30))[0]

    def test_from_config(self):
        calendar = WorkingCalendar.from_config(CalendarConfig.loads(VALID_CONFIG))

        assert calendar.week.is_working_day(Weekday.TUESDAY)
        assert not calendar.week.is_working_day(Weekday.WEDNESDAY)
        assert len(calendar.holiday_rules) == 2

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / "workcalendar.yaml"
        config_file.write_text(VALID_CONFIG)

        calendar = WorkingCalendar.from_yaml(config_file)

        assert calendar.holiday_rules[1] == MovableHoliday()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            WorkingCalendar.from_yaml(tmp_path / "missing.yaml")


class TestTryParseConfig:
    """Tests for try_parse_config."""

    def test_valid_text(self):
        calendar = try_parse_config(VALID_CONFIG)

        assert calendar is not None
        assert calendar.add_working_days(pendulum.naive(2015, 6, 15, 9, 0), 1) == (
            pendulum.naive(2015, 6, 16, 9, 0)
        )

    def test_valid_mapping(self):
        calendar = try_parse_config({"week": {"friday": [{"start": "08:00", "end": "12:00"}]}})

        assert calendar is not None
        assert calendar.is_working_day(pendulum.naive(2015, 6, 19))

    @pytest.mark.parametrize(
        "config",
        [
            "week: [",
            "- just a list",
            {"week": {}},
            {"week": {"funday": [{"start": "09:00", "end": "10:00"}]}},
            {"week": {"monday": [{"start": "10:00", "end": "09:00"}]}},
        ],
    )
    def test_invalid_returns_none(self, config):
        assert try_parse_config(config) is None


class TestQueries:
    """Tests for classification queries through the service."""

    def test_is_working_day(self, italian_calendar):
        assert italian_calendar.is_working_day(date(2015, 6, 24))
        assert not italian_calendar.is_working_day(date(2015, 6, 2))
        assert not italian_calendar.is_working_day(date(2015, 6, 27))

    def test_holidays_for(self, mid_june_calendar):
        assert mid_june_calendar.holidays_for(2016) == frozenset(
            [date(2016, 6, 17), date(2016, 6, 18), date(2016, 3, 28)]
        )

    def test_is_working_moment(self, calendar):
        is_working, following, previous = calendar.is_working_moment(
            pendulum.naive(2015, 6, 19, 18, 0)
        )

        assert not is_working
        assert following == pendulum.naive(2015, 6, 22, 9, 0)
        assert previous == pendulum.naive(2015, 6, 19, 17, 59)

    def test_previous_and_next(self, calendar):
        moment = pendulum.naive(2015, 6, 16, 13, 20)

        assert calendar.previous_working_moment(moment) == (
            False, pendulum.naive(2015, 6, 16, 12, 59)
        )
        assert calendar.next_working_moment(moment) == (
            False, pendulum.naive(2015, 6, 16, 14, 0)
        )


class TestWorkingDaysBetween:
    """Tests for working_days_between."""

    def test_full_week(self, calendar):
        days = calendar.working_days_between(date(2015, 6, 15), date(2015, 6, 19))

        assert days == [
            pendulum.date(2015, 6, 19),
            pendulum.date(2015, 6, 18),
            pendulum.date(2015, 6, 17),
            pendulum.date(2015, 6, 16),
            pendulum.date(2015, 6, 15),
        ]

    def test_reversed_bounds(self, calendar):
        forward = calendar.working_days_between(date(2015, 6, 15), date(2015, 6, 19))
        backward = calendar.working_days_between(date(2015, 6, 19), date(2015, 6, 15))

        assert forward == backward

    def test_exclude_ends(self, calendar):
        days = calendar.working_days_between(
            date(2015, 6, 15), date(2015, 6, 19), include_ends=False
        )

        assert days == [pendulum.date(2015, 6, 18), pendulum.date(2015, 6, 17), pendulum.date(2015, 6, 16)]

    def test_across_weekend(self, calendar):
        days = calendar.working_days_between(date(2015, 6, 19), date(2015, 6, 23))

        assert days == [pendulum.date(2015, 6, 23), pendulum.date(2015, 6, 22), pendulum.date(2015, 6, 19)]

    def test_end_on_weekend_is_kept(self, calendar):
        """Endpoints are included whatever they are."""
        days = calendar.working_days_between(date(2015, 6, 18), date(2015, 6, 20))

        assert days == [pendulum.date(2015, 6, 20), pendulum.date(2015, 6, 19), pendulum.date(2015, 6, 18)]

    def test_same_day(self, calendar):
        moment = pendulum.naive(2015, 6, 16, 10, 0)

        assert calendar.working_days_between(moment, moment.add(hours=3)) == [pendulum.date(2015, 6, 16)]

    def test_start_on_sunday_rejected(self, calendar):
        with pytest.raises(InvalidStartError):
            calendar.working_days_between(date(2015, 6, 14), date(2015, 6, 19))

    def test_holidays_skipped_inside(self, italian_calendar):
        days = italian_calendar.working_days_between(date(2015, 12, 30), date(2016, 1, 8))

        assert days == [
            pendulum.date(2016, 1, 8),
            pendulum.date(2016, 1, 7),
            pendulum.date(2016, 1, 5),
            pendulum.date(2016, 1, 4),
            pendulum.date(2015, 12, 31),
            pendulum.date(2015, 12, 30),
        ]

    def test_never_past_end(self, calendar):
        days = calendar.working_days_between(date(2015, 6, 15), date(2015, 7, 31), include_ends=False)

        assert max(days) < pendulum.date(2015, 7, 31)
        assert min(days) > pendulum.date(2015, 6, 15)
        assert len(days) == 33
