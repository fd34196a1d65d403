"""Time source for the fuzzy date engine."""

from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fuzzy_dates.config import get_settings

# Returns today's civil date; injected into FuzzyDateResolver
Clock = Callable[[], date]


def system_today(timezone: str | None = None) -> date:
    """Today's date in ``timezone`` (defaults to the configured zone)."""
    tz_name = timezone or get_settings().timezone
    return datetime.now(ZoneInfo(tz_name)).date()


def fixed_clock(today: date) -> Clock:
    """A clock that always reports ``today``."""
    return lambda: today


def to_civil_date(value: date) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value
