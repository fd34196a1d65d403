"""Pytest configuration and fixtures."""

from datetime import date
from typing import Any

import pytest

from fuzzy_dates.clock import fixed_clock
from fuzzy_dates.config.holidays import load_holiday_calendar
from fuzzy_dates.resolver import FuzzyDateResolver

# Wednesday
REFERENCE_DATE = date(2024, 3, 13)


def _make_struct(**fields: Any) -> dict[str, Any]:
    """Build an NLU parameter struct, e.g. make_struct(FuzzyDateMonth="März")."""
    return {
        "fields": {
            name: {"stringValue": str(value), "kind": "stringValue"}
            for name, value in fields.items()
        }
    }


@pytest.fixture
def make_struct():
    """Factory for NLU parameter structs."""
    return _make_struct


@pytest.fixture
def reference_date():
    return REFERENCE_DATE


@pytest.fixture
def resolver():
    """Resolver whose clock is pinned to the reference date."""
    return FuzzyDateResolver(
        clock=fixed_clock(REFERENCE_DATE),
        holidays=load_holiday_calendar(),
    )
