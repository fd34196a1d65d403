"""Tests for fuzzy date parameter parsing and result types."""

import unicodedata
from datetime import date, datetime

import pytest

from fuzzy_dates.errors import InvalidFuzzyDateError
from fuzzy_dates.parameters import (
    FuzzyDateField,
    FuzzyDateParameter,
    FuzzyDateReturn,
    Modifier,
)


class TestModifier:
    """Tests for Modifier.parse."""

    def test_known_labels(self):
        """Test the three spoken modifiers."""
        assert Modifier.parse("Anfang") is Modifier.ANFANG
        assert Modifier.parse("Mitte") is Modifier.MITTE
        assert Modifier.parse("Ende") is Modifier.ENDE

    def test_case_insensitive(self):
        """Test matching ignores case and whitespace."""
        assert Modifier.parse(" mitte ") is Modifier.MITTE

    def test_absent_is_unspecified(self):
        """Test missing modifier behaves as the start."""
        assert Modifier.parse(None) is Modifier.UNSPECIFIED
        assert Modifier.parse("") is Modifier.UNSPECIFIED
        assert Modifier.UNSPECIFIED.is_start
        assert Modifier.ANFANG.is_start

    def test_unrecognized(self):
        """Test unknown labels are kept apart from absent ones."""
        assert Modifier.parse("Spätestens") is Modifier.UNRECOGNIZED
        assert not Modifier.UNRECOGNIZED.is_start


class TestFromStruct:
    """Tests for FuzzyDateParameter.from_struct."""

    def test_parses_tagged_values(self, make_struct):
        """Test protobuf-style tagged values are unwrapped."""
        parameter = FuzzyDateParameter.from_struct(
            make_struct(FuzzyDateSeason="Frühjahr", FuzzyDateModifier="Mitte", FuzzyDateYear="2024")
        )

        assert parameter.season == "Frühjahr"
        assert parameter.modifier == "Mitte"
        assert parameter.year == 2024
        assert parameter.month is None

    def test_parses_bare_values(self):
        """Test bare strings and number years are accepted."""
        parameter = FuzzyDateParameter.from_struct(
            {"fields": {"FuzzyDateMonth": "Mai", "FuzzyDateYear": {"numberValue": 2025.0}}}
        )

        assert parameter.month == "Mai"
        assert parameter.year == 2025

    def test_normalizes_decomposed_umlauts(self, make_struct):
        """Test a decomposed 'ä' is composed."""
        decomposed = unicodedata.normalize("NFD", "März")
        parameter = FuzzyDateParameter.from_struct(make_struct(FuzzyDateMonth=decomposed))

        assert parameter.month == "März"

    def test_empty_values_are_absent(self, make_struct):
        """Test unfilled NLU slots do not count as present."""
        parameter = FuzzyDateParameter.from_struct(
            make_struct(FuzzyDateMonth="", FuzzyDateYear="", FuzzyDateSeason="Sommer")
        )

        assert parameter.month is None
        assert parameter.year is None
        assert parameter.category() == (FuzzyDateField.SEASON, "Sommer")

    def test_missing_parameter_raises(self):
        """Test None is rejected."""
        with pytest.raises(InvalidFuzzyDateError):
            FuzzyDateParameter.from_struct(None)

    def test_missing_fields_raises(self):
        """Test a mapping without 'fields' is rejected."""
        with pytest.raises(InvalidFuzzyDateError, match="fields"):
            FuzzyDateParameter.from_struct({"FuzzyDateMonth": "Mai"})

    def test_invalid_year_raises(self, make_struct):
        """Test a non-numeric year names the offending field."""
        with pytest.raises(InvalidFuzzyDateError) as exc_info:
            FuzzyDateParameter.from_struct(make_struct(FuzzyDateMonth="Mai", FuzzyDateYear="nächstes"))

        assert exc_info.value.field is FuzzyDateField.YEAR
        assert exc_info.value.value == "nächstes"

    @pytest.mark.parametrize("raw", ["²⁰²⁴", "٢٠٢٤", "9" * 5000, "10000"])
    def test_non_ascii_or_oversized_year_raises(self, make_struct, raw):
        """Test non-ASCII digits and over-long digit strings are rejected."""
        with pytest.raises(InvalidFuzzyDateError) as exc_info:
            FuzzyDateParameter.from_struct(make_struct(FuzzyDateMonth="Mai", FuzzyDateYear=raw))

        assert exc_info.value.field is FuzzyDateField.YEAR

    def test_category_precedence(self, make_struct):
        """Test month wins over season, relative and holiday."""
        parameter = FuzzyDateParameter.from_struct(
            make_struct(
                FuzzyDatePublicHolidays="Ostermontag",
                FuzzyDateRelative="Nächste Woche",
                FuzzyDateSeason="Winter",
                FuzzyDateMonth="Juni",
            )
        )

        assert parameter.category() == (FuzzyDateField.MONTH, "Juni")

    def test_no_category(self, make_struct):
        """Test a bag with only year and modifier has no category."""
        parameter = FuzzyDateParameter.from_struct(
            make_struct(FuzzyDateYear="2024", FuzzyDateModifier="Ende")
        )

        assert parameter.category() is None


class TestFuzzyDateReturn:
    """Tests for FuzzyDateReturn."""

    def test_is_immutable(self):
        """Test results cannot be modified."""
        result = FuzzyDateReturn(name="Mai", date=date(2024, 5, 1))

        with pytest.raises(AttributeError):
            result.name = "Juni"  # type: ignore[misc]

    def test_strips_time_of_day(self):
        """Test datetimes are reduced to their civil date."""
        result = FuzzyDateReturn(name="Mai", date=datetime(2024, 5, 1, 23, 30))

        assert result.date == date(2024, 5, 1)
        assert type(result.date) is date

    def test_to_dict(self):
        """Test serialization for persistence."""
        result = FuzzyDateReturn(name="Mitte Frühjahr", date=date(2024, 5, 5))

        assert result.to_dict() == {"name": "Mitte Frühjahr", "date": "2024-05-05"}

    def test_to_display_string(self):
        """Test German date rendering."""
        result = FuzzyDateReturn(name="Mitte Frühjahr", date=date(2024, 5, 5))

        assert result.to_display_string() == "Mitte Frühjahr (05.05.2024)"
