"""
Tests for the command line interface.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from workcalendar import __version__
from workcalendar.cli.app import app

EXAMPLE_CONFIG = str(Path(__file__).parent.parent / "config.example.yaml")

runner = CliRunner()


@pytest.fixture
def short_week_config(tmp_path):
    config_file = tmp_path / "workcalendar.yaml"
    config_file.write_text(
        "week:\n"
        "  monday: [{start: '08:00', end: '12:00'}]\n"
        "  wednesday: [{start: '08:00', end: '12:00'}]\n"
    )
    return str(config_file)


class TestArithmeticCommands:
    """Tests for add-days, add-hours and add-minutes."""

    def test_add_days(self):
        result = runner.invoke(app, ["add-days", "2015-12-31T09:00", "3", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 0
        assert "2016-01-07 09:00:00" in result.output

    def test_add_hours(self):
        result = runner.invoke(app, ["add-hours", "2015-06-16T09:45", "33", "--config", EXAMPLE_CONFIG])

        assert result.exit_code == 0
        assert "2015-06-22 10:45:00" in result.output

    def test_add_minutes(self):
        result = runner.invoke(app, ["add-minutes", "2015-06-24T12:55", "15", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 0
        assert "2015-06-24 14:10:00" in result.output

    def test_custom_week(self, short_week_config):
        result = runner.invoke(app, ["add-days", "2015-06-15T10:00", "1", "-c", short_week_config])

        assert result.exit_code == 0
        assert "2015-06-17 10:00:00" in result.output

    def test_invalid_start(self):
        result = runner.invoke(app, ["add-days", "2015-06-14T09:00", "4", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 1
        assert "Invalid start" in result.output

    def test_negative_amount(self):
        result = runner.invoke(app, ["add-minutes", "-c", EXAMPLE_CONFIG, "2015-06-15T09:00", "--", "-5"])

        assert result.exit_code == 1
        assert "must not be negative" in result.output

    def test_unparseable_instant(self):
        result = runner.invoke(app, ["add-days", "next tuesday", "1", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 2

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["add-days", "2015-06-15T09:00", "1", "-c", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Config file not found" in result.output

    def test_broken_config(self, tmp_path):
        config_file = tmp_path / "workcalendar.yaml"
        config_file.write_text("week: {}\n")

        result = runner.invoke(app, ["add-days", "2015-06-15T09:00", "1", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_not_working(self):
        result = runner.invoke(app, ["check", "2015-06-24T13:30", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 0
        assert "not working" in result.output
        assert "2015-06-24 12:59:00" in result.output
        assert "2015-06-24 14:00:00" in result.output

    def test_working_with_granularity(self):
        result = runner.invoke(app, ["check", "2015-06-24T10:00", "-g", "15", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 0
        assert "not working" not in result.output
        assert "2015-06-24 09:45:00" in result.output
        assert "2015-06-24 10:15:00" in result.output


class TestBetweenCommand:
    """Tests for the between command."""

    def test_between(self):
        result = runner.invoke(app, ["between", "2015-12-30", "2016-01-08", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 0
        assert "2016-01-07" in result.output
        assert "2016-01-06" not in result.output
        assert "6 day(s)" in result.output

    def test_exclude_ends(self):
        result = runner.invoke(
            app, ["between", "2015-06-15", "2015-06-19", "--exclude-ends", "-c", EXAMPLE_CONFIG]
        )

        assert result.exit_code == 0
        assert "3 day(s)" in result.output

    def test_start_on_weekend(self):
        result = runner.invoke(app, ["between", "2015-06-14", "2015-06-19", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestHolidaysCommand:
    """Tests for the holidays command."""

    def test_holidays(self):
        result = runner.invoke(app, ["holidays", "2016", "-c", EXAMPLE_CONFIG])

        assert result.exit_code == 0
        assert "Holidays 2016" in result.output
        assert "2016-03-28" in result.output
        assert "2016-12-26" in result.output

    def test_no_holidays(self, short_week_config):
        result = runner.invoke(app, ["holidays", "2016", "-c", short_week_config])

        assert result.exit_code == 0
        assert "No holidays configured for 2016" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
