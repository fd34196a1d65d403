"""German public holiday table loader."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]

from fuzzy_dates.easter import easter_offset
from fuzzy_dates.parameters import normalize_key

WEEKDAY_NAME_TO_INDEX = {
    "montag": 0,
    "mo": 0,
    "dienstag": 1,
    "di": 1,
    "mittwoch": 2,
    "mi": 2,
    "donnerstag": 3,
    "do": 3,
    "freitag": 4,
    "fr": 4,
    "samstag": 5,
    "sonnabend": 5,
    "sa": 5,
    "sonntag": 6,
    "so": 6,
}

DEFAULT_HOLIDAYS_PATH = Path(__file__).resolve().parent / "holidays.yaml"

_EASTER_RULE = re.compile(r"^easter\s*([+-]\s*\d+)?$")

RuleType = Literal["fixed", "easter", "weekday_before"]


@dataclass(frozen=True)
class HolidayRule:
    """Date rule for a holiday, evaluated per year."""

    rule_type: RuleType
    month: int | None = None
    day: int | None = None
    offset: int = 0
    weekday: int | None = None

    def date_for(self, year: int) -> date:
        """Return the holiday's date in ``year``."""
        if self.rule_type == "fixed":
            if self.month is None or self.day is None:
                raise ValueError("fixed rule requires month and day")
            return date(year, self.month, self.day)

        if self.rule_type == "easter":
            return easter_offset(year, self.offset)

        if self.rule_type == "weekday_before":
            if self.month is None or self.day is None or self.weekday is None:
                raise ValueError("weekday_before rule requires month, day and weekday")
            anchor = date(year, self.month, self.day)
            # 1..7 days back, never the anchor itself
            days_back = (anchor.weekday() - self.weekday - 1) % 7 + 1
            return anchor - timedelta(days=days_back)

        raise ValueError(f"Unknown holiday rule type {self.rule_type!r}")


@dataclass(frozen=True)
class HolidayDefinition:
    """A named holiday with its date rule and spoken aliases."""

    name: str
    rule: HolidayRule
    aliases: tuple[str, ...] = ()

    def date_for(self, year: int) -> date:
        return self.rule.date_for(year)


@dataclass(frozen=True)
class HolidayCalendar:
    """Holiday definitions indexed by normalized name and alias."""

    holidays: tuple[HolidayDefinition, ...]
    _index: dict[str, HolidayDefinition] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for holiday in self.holidays:
            for label in (holiday.name, *holiday.aliases):
                key = normalize_key(label)
                existing = self._index.get(key)
                if existing is not None and existing is not holiday:
                    raise ValueError(
                        f"holiday name {label!r} used by both {existing.name!r} and {holiday.name!r}"
                    )
                self._index[key] = holiday

    def lookup(self, name: str) -> HolidayDefinition | None:
        """Find a holiday by (case-insensitive) name or alias."""
        return self._index.get(normalize_key(name))

    def names(self) -> list[str]:
        return [holiday.name for holiday in self.holidays]


def _parse_weekday(value: Any) -> int | None:
    if isinstance(value, int) and 0 <= value <= 6:
        return value
    if isinstance(value, str):
        return WEEKDAY_NAME_TO_INDEX.get(value.strip().lower())
    return None


def _parse_month_day(value: Any) -> tuple[int, int] | None:
    if isinstance(value, str):
        parts = value.strip().split("-")
        if len(parts) == 2 and all(part.isdigit() for part in parts):
            month, day = int(parts[0]), int(parts[1])
            if 1 <= month <= 12 and 1 <= day <= 31:
                return month, day
    return None


def _parse_rule_from_string(rule: str) -> HolidayRule:
    normalized = rule.strip().lower()

    month_day = _parse_month_day(normalized)
    if month_day:
        month, day = month_day
        return HolidayRule(rule_type="fixed", month=month, day=day)

    match = _EASTER_RULE.match(normalized)
    if match and match.group(1):
        offset = int(match.group(1).replace(" ", ""))
        return HolidayRule(rule_type="easter", offset=offset)

    raise ValueError(f"Invalid date_rule {rule!r}")


def _parse_rule(item: dict[str, Any]) -> HolidayRule:
    rule_value = item.get("date_rule")
    if not rule_value:
        raise ValueError("holiday missing date_rule")
    if not isinstance(rule_value, str):
        raise ValueError("holiday date_rule must be a string")

    normalized = rule_value.strip().lower()
    if normalized == "fixed":
        month = item.get("month")
        day = item.get("day")
        if not isinstance(month, int) or not isinstance(day, int):
            raise ValueError("fixed date_rule requires month (1-12) and day (1-31)")
        if not (1 <= month <= 12) or not (1 <= day <= 31):
            raise ValueError("fixed date_rule month/day out of range")
        return HolidayRule(rule_type="fixed", month=month, day=day)

    if normalized == "easter":
        offset = item.get("offset", 0)
        if not isinstance(offset, int):
            raise ValueError("easter date_rule offset must be an integer number of days")
        return HolidayRule(rule_type="easter", offset=offset)

    if normalized == "weekday_before":
        weekday = _parse_weekday(item.get("weekday"))
        before = _parse_month_day(item.get("before"))
        if weekday is None or before is None:
            raise ValueError("weekday_before date_rule requires weekday and before (MM-DD)")
        month, day = before
        return HolidayRule(rule_type="weekday_before", month=month, day=day, weekday=weekday)

    return _parse_rule_from_string(normalized)


@lru_cache
def load_holiday_calendar(path: Path | None = None) -> HolidayCalendar:
    """Load holiday definitions from YAML (the bundled table by default)."""
    holidays_path = path or DEFAULT_HOLIDAYS_PATH
    if not holidays_path.exists():
        raise FileNotFoundError(f"holiday table not found: {holidays_path}")

    raw = holidays_path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if data is None:
        return HolidayCalendar(holidays=())

    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        items = data.get("holidays") or []
    else:
        raise ValueError("holidays.yaml must be a list or mapping with 'holidays'")

    if not isinstance(items, list):
        raise ValueError("holidays must be a list")

    results: list[HolidayDefinition] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"holidays[{idx}] must be a mapping")
        name = item.get("name")
        if not name:
            raise ValueError(f"holidays[{idx}] missing name")

        try:
            rule = _parse_rule(item)
        except ValueError as exc:
            raise ValueError(f"holidays[{idx}] ({name}): {exc}") from exc

        raw_aliases = item.get("aliases") or []
        if not isinstance(raw_aliases, list):
            raise ValueError(f"holidays[{idx}] aliases must be a list")

        results.append(
            HolidayDefinition(
                name=str(name),
                rule=rule,
                aliases=tuple(str(alias) for alias in raw_aliases),
            )
        )

    return HolidayCalendar(holidays=tuple(results))
