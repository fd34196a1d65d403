"""Exceptions raised by the fuzzy date engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fuzzy_dates.parameters import FuzzyDateField


class InvalidFuzzyDateError(ValueError):
    """The fuzzy date parameter cannot be resolved to a calendar date."""

    def __init__(
        self,
        message: str,
        field: FuzzyDateField | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
