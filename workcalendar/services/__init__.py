"""
Service layer exposing the working calendar to callers.
"""

from .working_calendar import WorkingCalendar, try_parse_config

__all__ = ["WorkingCalendar", "try_parse_config"]
