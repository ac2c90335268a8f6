"""
Configuration management using Pydantic.

The configuration describes a work week and its holidays::

    week:
      monday:
        - {start: "09:00", end: "13:00"}
        - {start: "14:00", end: "18:00"}
    holidays:
      - {kind: fixed, day: 25, month: 12}
      - {kind: movable, rule: easterMonday}
"""

from datetime import time
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Mapping, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .domain.exceptions import ConfigurationError
from .domain.holidays import FixedHoliday, HolidayRule, MovableHoliday, MovableRule
from .domain.models import TimeInterval, Weekday, WorkWeek

DEFAULT_CONFIG_NAME = "workcalendar.yaml"


class IntervalConfig(BaseModel):
    """A working interval of a day."""
    start: time
    end: time

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_sexagesimal(cls, value: Any) -> Any:
        """
        Undo YAML 1.1 base-60 integers.

        Unquoted ``14:00`` loads as 840 and ``9:30:00`` as 34200. Values below
        1440 are read as hours:minutes, larger ones as hours:minutes:seconds.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            return value
        if value < 0 or value >= 24 * 3600:
            raise ValueError(f"Not a time of day: {value}")
        if value < 24 * 60:
            hours, minutes = divmod(value, 60)
            return time(hour=hours, minute=minutes)
        hours, rest = divmod(value, 3600)
        minutes, seconds = divmod(rest, 60)
        return time(hour=hours, minute=minutes, second=seconds)

    @model_validator(mode="after")
    def validate_order(self) -> "IntervalConfig":
        """Ensure the interval opens before it closes."""
        if self.end <= self.start:
            raise ValueError(f"end {self.end} must be later than start {self.start}")
        return self

    def to_interval(self) -> TimeInterval:
        return TimeInterval(start=self.start, end=self.end)


class FixedHolidayConfig(BaseModel):
    """Holiday on a fixed day and month."""
    kind: Literal["fixed"]
    day: int
    month: int

    @field_validator("month")
    @classmethod
    def validate_month(cls, v: int) -> int:
        """Validate month is between 1 and 12."""
        if not 1 <= v <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {v}")
        return v

    @field_validator("day")
    @classmethod
    def validate_day(cls, v: int) -> int:
        """Validate day is between 1 and 31."""
        if not 1 <= v <= 31:
            raise ValueError(f"Day must be between 1 and 31, got {v}")
        return v

    def to_rule(self) -> FixedHoliday:
        return FixedHoliday(day=self.day, month=self.month)


class MovableHolidayConfig(BaseModel):
    """Holiday computed from a movable anchor, e.g. ``easterMonday``."""
    kind: Literal["movable"]
    rule: MovableRule

    @field_validator("rule", mode="before")
    @classmethod
    def parse_rule(cls, value: Any) -> MovableRule:
        """Accept camelCase and snake_case rule names."""
        try:
            return MovableRule.parse(value)
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc

    def to_rule(self) -> MovableHoliday:
        return MovableHoliday(rule=self.rule)


HolidayConfig = Annotated[
    Union[FixedHolidayConfig, MovableHolidayConfig],
    Field(discriminator="kind"),
]


class CalendarConfig(BaseModel):
    """Working calendar configuration."""
    week: Dict[Weekday, List[IntervalConfig]]
    holidays: List[HolidayConfig] = Field(default_factory=list)

    @field_validator("week", mode="before")
    @classmethod
    def parse_weekdays(cls, value: Any) -> Any:
        """Map weekday names or indexes to ``Weekday`` members."""
        if not isinstance(value, Mapping):
            raise ValueError("week must be a mapping of weekday to intervals")
        parsed: Dict[Weekday, Any] = {}
        for key, intervals in value.items():
            try:
                weekday = Weekday.parse(key)
            except ConfigurationError as exc:
                raise ValueError(str(exc)) from exc
            if weekday in parsed:
                raise ValueError(f"Duplicate weekday detected: {key}")
            parsed[weekday] = intervals if intervals is not None else []
        return parsed

    @field_validator("week")
    @classmethod
    def validate_has_working_day(
        cls, value: Dict[Weekday, List[IntervalConfig]]
    ) -> Dict[Weekday, List[IntervalConfig]]:
        """Ensure at least one weekday has intervals."""
        if not any(value.values()):
            raise ValueError("week must define at least one working interval")
        return value

    def build_week(self) -> WorkWeek:
        """
        Raises:
            ConfigurationError: If intervals of a day overlap
        """
        return WorkWeek({
            weekday: [interval.to_interval() for interval in intervals]
            for weekday, intervals in self.week.items()
        })

    def build_holidays(self) -> List[HolidayRule]:
        """
        Raises:
            ConfigurationError: If a day/month pair never exists
        """
        return [holiday.to_rule() for holiday in self.holidays]

    @classmethod
    def from_mapping(cls, data: Any) -> "CalendarConfig":
        """
        Validate a plain mapping.

        Raises:
            ConfigurationError: If the data does not match the schema
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration must contain a mapping at the root level.")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "CalendarConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            CalendarConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a {DEFAULT_CONFIG_NAME} file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        return cls.from_mapping(data)

    @classmethod
    def loads(cls, text: str) -> "CalendarConfig":
        """Parse configuration from a YAML (or JSON) string."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML: {exc}") from exc
        return cls.from_mapping(data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for workcalendar.yaml in current directory
    config_path = Path.cwd() / DEFAULT_CONFIG_NAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / DEFAULT_CONFIG_NAME

    return config_path
