"""Resolve fuzzy date parameters to concrete calendar dates.

The resolver maps the structured parameter bag produced by the NLU parse to
a ``FuzzyDateReturn`` (display name plus civil date). Four categories are
supported and checked in this order:

1. Month (``Mitte März``)
2. Season (``Ende Winter``)
3. Relative expression (``Nächste Woche``)
4. Public holiday (``Ostermontag``)

All arithmetic is done on ``datetime.date`` in whole days. The only source
of wall-clock time is the injected clock.
"""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any

import structlog

from fuzzy_dates.clock import Clock, system_today, to_civil_date
from fuzzy_dates.config.holidays import HolidayCalendar, load_holiday_calendar
from fuzzy_dates.config.settings import get_settings
from fuzzy_dates.errors import InvalidFuzzyDateError
from fuzzy_dates.parameters import (
    FuzzyDateField,
    FuzzyDateParameter,
    FuzzyDateReturn,
    Modifier,
    display_name,
    normalize_key,
)
from fuzzy_dates.seasons import lookup_season

logger = structlog.get_logger(__name__)

MONTH_NAME_TO_INDEX = {
    "januar": 1,
    "jänner": 1,
    "februar": 2,
    "märz": 3,
    "maerz": 3,
    "april": 4,
    "mai": 5,
    "juni": 6,
    "juli": 7,
    "august": 8,
    "september": 9,
    "oktober": 10,
    "november": 11,
    "dezember": 12,
}

NEXT_WEEK = "Nächste Woche"
NEXT_MONTH = "Nächster Monat"
NEXT_YEAR = "Nächstes Jahr"

# Offsets from the most recent Sunday (weeks start on Sunday)
NEXT_WEEK_OFFSETS: dict[Modifier, int] = {
    Modifier.UNSPECIFIED: 7,
    Modifier.ANFANG: 7,
    Modifier.MITTE: 10,
    Modifier.ENDE: 13,
    Modifier.UNRECOGNIZED: 13,
}

# (month, day) of the next year; the middle is 1 July by convention
NEXT_YEAR_DAYS: dict[Modifier, tuple[int, int]] = {
    Modifier.UNSPECIFIED: (1, 1),
    Modifier.ANFANG: (1, 1),
    Modifier.MITTE: (7, 1),
    Modifier.ENDE: (12, 31),
    Modifier.UNRECOGNIZED: (12, 31),
}


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def day_for_modifier(year: int, month: int, modifier: Modifier) -> int:
    """Day of month for a month-based fuzzy date.

    Anything but Mitte/Ende (including an unrecognized modifier) is the 1st.
    """
    if modifier is Modifier.MITTE:
        return days_in_month(year, month) // 2
    if modifier is Modifier.ENDE:
        return days_in_month(year, month)
    return 1


def sunday_based_weekday(value: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (value.weekday() + 1) % 7


def add_months(value: date, months: int) -> tuple[int, int]:
    """Return (year, month) ``months`` after ``value``'s month, rolling years over."""
    year, month_index = divmod(value.year * 12 + value.month - 1 + months, 12)
    return year, month_index + 1


class FuzzyDateResolver:
    """Resolves fuzzy date parameters against an injectable clock.

    Args:
        clock: Returns today's civil date. Defaults to the system clock in
            the configured time zone.
        holidays: Holiday table. Defaults to the configured YAML table,
            loaded lazily on first holiday lookup.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        holidays: HolidayCalendar | None = None,
    ):
        self._clock: Clock = clock or system_today
        self._holidays = holidays
        self._logger = logger.bind(component="fuzzy_date_resolver")

    @property
    def holidays(self) -> HolidayCalendar:
        if self._holidays is None:
            self._holidays = load_holiday_calendar(get_settings().holidays_file)
        return self._holidays

    def today(self) -> date:
        return to_civil_date(self._clock())

    def resolve(
        self,
        parameter: FuzzyDateParameter | Mapping[str, Any] | None,
        reference_date: date | None = None,
    ) -> FuzzyDateReturn:
        """Map a fuzzy date parameter to a name / date pair.

        If no year is given, dates are computed for the reference date's year.

        Args:
            parameter: Parsed parameter or the raw NLU struct.
            reference_date: Replaces "today" for relative expressions.

        Raises:
            InvalidFuzzyDateError: If the parameter is missing or malformed,
                carries no category field, or names an unknown month or
                holiday.
        """
        if not isinstance(parameter, FuzzyDateParameter):
            parameter = FuzzyDateParameter.from_struct(parameter)

        reference = to_civil_date(reference_date) if reference_date is not None else self.today()
        year = parameter.year if parameter.year is not None else reference.year

        category = parameter.category()
        if category is None:
            raise InvalidFuzzyDateError(
                "Recognized a non valid fuzzy date: no month, season, relative "
                "expression or public holiday given"
            )

        field, value = category
        if field is FuzzyDateField.MONTH:
            result = self.resolve_month(year, value, parameter.modifier)
        elif field is FuzzyDateField.SEASON:
            result = self.resolve_season(year, value, parameter.modifier, today=reference)
        elif field is FuzzyDateField.RELATIVE:
            result = self.resolve_relative(reference, value, parameter.modifier)
        else:
            result = self.resolve_holiday(year, value, parameter.modifier)

        self._logger.debug(
            "fuzzy_date_resolved",
            category=field.value,
            value=value,
            modifier=parameter.modifier,
            name=result.name,
            date=result.date.isoformat(),
        )
        return result

    def resolve_month(
        self, year: int, month_name: str, modifier: str | None = None
    ) -> FuzzyDateReturn:
        """Resolve a German month name; the modifier picks 1st, middle or last day."""
        month = MONTH_NAME_TO_INDEX.get(normalize_key(month_name))
        if month is None:
            raise InvalidFuzzyDateError(
                f"Unknown month {month_name!r}", field=FuzzyDateField.MONTH, value=month_name
            )

        day = day_for_modifier(year, month, Modifier.parse(modifier))
        return FuzzyDateReturn(
            name=display_name(month_name, modifier), date=date(year, month, day)
        )

    def resolve_season(
        self,
        year: int,
        season_name: str,
        modifier: str | None = None,
        today: date | None = None,
    ) -> FuzzyDateReturn:
        """Resolve a season starting in ``year``.

        Unknown seasons fall back to ``today`` (the clock's date when not
        given) instead of raising.
        """
        name = display_name(season_name, modifier)
        season = lookup_season(season_name)
        if season is None:
            fallback = to_civil_date(today) if today is not None else self.today()
            self._logger.warning(
                "unknown_season_fallback", season=season_name, date=fallback.isoformat()
            )
            return FuzzyDateReturn(name=name, date=fallback)

        parsed = Modifier.parse(modifier)
        if parsed.is_start:
            resolved = season.begin_date(year)
        elif parsed is Modifier.MITTE:
            resolved = season.middle_date(year)
        else:
            # Ende, and anything unrecognized
            resolved = season.end_date(year)
        return FuzzyDateReturn(name=name, date=resolved)

    def resolve_relative(
        self, reference_date: date, expression: str, modifier: str | None = None
    ) -> FuzzyDateReturn:
        """Resolve next week / next month / next year relative to ``reference_date``.

        Unknown expressions fall back to the reference date itself. Raises
        InvalidFuzzyDateError when the target date lies past year 9999.
        """
        reference = to_civil_date(reference_date)
        name = display_name(expression, modifier)
        parsed = Modifier.parse(modifier)
        key = normalize_key(expression)

        try:
            if key == normalize_key(NEXT_WEEK):
                last_sunday = reference - timedelta(days=sunday_based_weekday(reference))
                return FuzzyDateReturn(
                    name=name, date=last_sunday + timedelta(days=NEXT_WEEK_OFFSETS[parsed])
                )

            if key == normalize_key(NEXT_MONTH):
                year, month = add_months(reference, 1)
                return FuzzyDateReturn(
                    name=name, date=date(year, month, day_for_modifier(year, month, parsed))
                )

            if key == normalize_key(NEXT_YEAR):
                month, day = NEXT_YEAR_DAYS[parsed]
                return FuzzyDateReturn(name=name, date=date(reference.year + 1, month, day))
        except (ValueError, OverflowError) as exc:
            # Only reachable near datetime.MAXYEAR
            raise InvalidFuzzyDateError(
                f"{expression!r} from {reference.isoformat()} is out of the supported date range",
                field=FuzzyDateField.RELATIVE,
                value=expression,
            ) from exc

        self._logger.warning(
            "unknown_relative_fallback", expression=expression, date=reference.isoformat()
        )
        return FuzzyDateReturn(name=name, date=reference)

    def resolve_holiday(
        self, year: int, holiday_name: str, modifier: str | None = None
    ) -> FuzzyDateReturn:
        """Resolve a German public holiday in ``year``.

        A holiday is a single day, so a modifier neither moves the date nor
        appears in the name.
        """
        holiday = self.holidays.lookup(holiday_name)
        if holiday is None:
            raise InvalidFuzzyDateError(
                f"Unknown public holiday {holiday_name!r}",
                field=FuzzyDateField.PUBLIC_HOLIDAYS,
                value=holiday_name,
            )
        if modifier:
            self._logger.debug(
                "holiday_modifier_ignored", holiday=holiday.name, modifier=modifier
            )
        return FuzzyDateReturn(name=holiday_name, date=holiday.date_for(year))


_default_resolver: FuzzyDateResolver | None = None


def get_resolver() -> FuzzyDateResolver:
    """Shared resolver on the system clock."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = FuzzyDateResolver()
    return _default_resolver


def resolve_fuzzy_date(
    parameter: FuzzyDateParameter | Mapping[str, Any] | None,
    reference_date: date | None = None,
) -> FuzzyDateReturn:
    """Resolve ``parameter`` with the shared resolver."""
    return get_resolver().resolve(parameter, reference_date)
