"""Fuzzy Dates - resolve German fuzzy date expressions to calendar dates."""

__version__ = "0.1.0"

from fuzzy_dates.clock import Clock, fixed_clock, system_today
from fuzzy_dates.config import configure_logging, get_settings
from fuzzy_dates.easter import compute_easter_sunday, easter_offset
from fuzzy_dates.errors import InvalidFuzzyDateError
from fuzzy_dates.parameters import (
    FuzzyDateField,
    FuzzyDateParameter,
    FuzzyDateReturn,
    Modifier,
)
from fuzzy_dates.resolver import FuzzyDateResolver, resolve_fuzzy_date

__all__ = [
    # Version
    "__version__",
    # Resolution
    "FuzzyDateResolver",
    "resolve_fuzzy_date",
    "compute_easter_sunday",
    "easter_offset",
    # Types
    "FuzzyDateField",
    "FuzzyDateParameter",
    "FuzzyDateReturn",
    "Modifier",
    "InvalidFuzzyDateError",
    # Clock
    "Clock",
    "fixed_clock",
    "system_today",
    # Config
    "get_settings",
    "configure_logging",
]
