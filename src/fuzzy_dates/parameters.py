"""Fuzzy date parameter and result types.

A fuzzy date arrives from the NLU parse as a protobuf ``Struct`` rendered to
a mapping, e.g.::

    {"fields": {"FuzzyDateSeason": {"stringValue": "Frühjahr"},
                "FuzzyDateModifier": {"stringValue": "Mitte"}}}

``FuzzyDateParameter.from_struct`` turns that into a typed, immutable value.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime
from enum import Enum
from typing import Any

from fuzzy_dates.errors import InvalidFuzzyDateError


class FuzzyDateField(str, Enum):
    """Field names of the fuzzy date parameter bag."""

    YEAR = "FuzzyDateYear"
    MONTH = "FuzzyDateMonth"
    SEASON = "FuzzyDateSeason"
    RELATIVE = "FuzzyDateRelative"
    PUBLIC_HOLIDAYS = "FuzzyDatePublicHolidays"
    MODIFIER = "FuzzyDateModifier"


# Checked in this order, first present field wins
CATEGORY_FIELDS: tuple[FuzzyDateField, ...] = (
    FuzzyDateField.MONTH,
    FuzzyDateField.SEASON,
    FuzzyDateField.RELATIVE,
    FuzzyDateField.PUBLIC_HOLIDAYS,
)


class Modifier(str, Enum):
    """Where within a fuzzy range the resolved date should fall."""

    UNSPECIFIED = ""
    ANFANG = "Anfang"
    MITTE = "Mitte"
    ENDE = "Ende"
    UNRECOGNIZED = "?"

    @classmethod
    def parse(cls, label: str | None) -> Modifier:
        """Map a spoken modifier label to a member (case-insensitive)."""
        if label is None or not label.strip():
            return cls.UNSPECIFIED
        key = normalize_key(label)
        for member in (cls.ANFANG, cls.MITTE, cls.ENDE):
            if member.value.casefold() == key:
                return member
        return cls.UNRECOGNIZED

    @property
    def is_start(self) -> bool:
        return self in (Modifier.UNSPECIFIED, Modifier.ANFANG)


def normalize_text(value: str) -> str:
    """NFC-normalize and strip a label so composed and decomposed umlauts match."""
    return unicodedata.normalize("NFC", value).strip()


def normalize_key(value: str) -> str:
    """Lookup key for a label: normalized and case-folded."""
    return normalize_text(value).casefold()


def display_name(name: str, modifier: str | None = None) -> str:
    """Combine an optional modifier label with the category name."""
    if modifier:
        return f"{modifier} {name}"
    return name


def _unwrap_value(raw: Any) -> Any:
    """Extract the payload of a protobuf ``Value`` mapping or pass scalars through."""
    if isinstance(raw, Mapping):
        kind = raw.get("kind")
        if isinstance(kind, str) and kind in raw:
            return raw[kind]
        for key in ("stringValue", "numberValue"):
            if key in raw:
                return raw[key]
        return None
    return raw


def _parse_year(raw: Any) -> int:
    if isinstance(raw, bool):
        raise InvalidFuzzyDateError(
            f"Invalid fuzzy date year {raw!r}", field=FuzzyDateField.YEAR, value=raw
        )
    year: int | None = None
    if isinstance(raw, int):
        year = raw
    elif isinstance(raw, float) and raw.is_integer():
        year = int(raw)
    elif isinstance(raw, str):
        stripped = raw.strip()
        # ASCII only: isdigit() also admits superscripts that int() rejects
        if stripped.isascii() and stripped.isdigit() and len(stripped) <= 4:
            year = int(stripped)
    # Winter ends in the following year, so MAXYEAR itself is excluded
    if year is not None and MINYEAR <= year < MAXYEAR:
        return year
    raise InvalidFuzzyDateError(
        f"Invalid fuzzy date year {raw!r}", field=FuzzyDateField.YEAR, value=raw
    )


@dataclass(frozen=True)
class FuzzyDateParameter:
    """Typed view of the fuzzy date parameter bag."""

    year: int | None = None
    month: str | None = None
    season: str | None = None
    relative: str | None = None
    public_holiday: str | None = None
    modifier: str | None = None

    @classmethod
    def from_struct(cls, struct: Any) -> FuzzyDateParameter:
        """Parse the NLU parameter struct.

        Raises:
            InvalidFuzzyDateError: If ``struct`` is missing, is not a mapping
                with a ``fields`` mapping, or carries a non-integer year.
        """
        if struct is None:
            raise InvalidFuzzyDateError("Recognized a non valid fuzzy date: parameter is missing")
        if not isinstance(struct, Mapping) or not isinstance(struct.get("fields"), Mapping):
            raise InvalidFuzzyDateError(
                "Recognized a non valid fuzzy date: parameter has no fields mapping",
                value=struct,
            )

        values: dict[FuzzyDateField, Any] = {}
        for field in FuzzyDateField:
            if field.value in struct["fields"]:
                value = _unwrap_value(struct["fields"][field.value])
                if value is not None:
                    values[field] = value

        def text(field: FuzzyDateField) -> str | None:
            value = values.get(field)
            if value is None:
                return None
            return normalize_text(str(value)) or None

        year = values.get(FuzzyDateField.YEAR)
        if isinstance(year, str) and not year.strip():
            year = None
        return cls(
            year=_parse_year(year) if year is not None else None,
            month=text(FuzzyDateField.MONTH),
            season=text(FuzzyDateField.SEASON),
            relative=text(FuzzyDateField.RELATIVE),
            public_holiday=text(FuzzyDateField.PUBLIC_HOLIDAYS),
            modifier=text(FuzzyDateField.MODIFIER),
        )

    def category(self) -> tuple[FuzzyDateField, str] | None:
        """Return the first present category field and its value."""
        candidates = {
            FuzzyDateField.MONTH: self.month,
            FuzzyDateField.SEASON: self.season,
            FuzzyDateField.RELATIVE: self.relative,
            FuzzyDateField.PUBLIC_HOLIDAYS: self.public_holiday,
        }
        for field in CATEGORY_FIELDS:
            value = candidates[field]
            if value is not None:
                return field, value
        return None


@dataclass(frozen=True)
class FuzzyDateReturn:
    """A resolved fuzzy date: display name plus civil date."""

    name: str
    date: date

    def __post_init__(self) -> None:
        # datetime is a subclass of date; keep only the civil date
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the persistence and response collaborators."""
        return {"name": self.name, "date": self.date.isoformat()}

    def to_display_string(self) -> str:
        """German user-facing rendering, e.g. ``Mitte Frühjahr (05.05.2024)``."""
        return f"{self.name} ({self.date:%d.%m.%Y})"
