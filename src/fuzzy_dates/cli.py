"""Command line front end for resolving fuzzy dates.

Usage:
    fuzzy-dates --season Frühjahr --modifier Mitte --year 2024
    fuzzy-dates --relative "Nächste Woche" --reference 2024-03-13 --json
    fuzzy-dates --easter 2024
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import MAXYEAR, MINYEAR, date
from typing import Any

from fuzzy_dates.config import configure_logging, get_logger
from fuzzy_dates.config.holidays import load_holiday_calendar
from fuzzy_dates.config.settings import get_settings
from fuzzy_dates.easter import compute_easter_sunday
from fuzzy_dates.errors import InvalidFuzzyDateError
from fuzzy_dates.parameters import FuzzyDateField
from fuzzy_dates.resolver import FuzzyDateResolver

logger = get_logger(__name__)

EXIT_INVALID = 2

# CLI option -> parameter bag field
OPTION_FIELDS = {
    "year": FuzzyDateField.YEAR,
    "month": FuzzyDateField.MONTH,
    "season": FuzzyDateField.SEASON,
    "relative": FuzzyDateField.RELATIVE,
    "holiday": FuzzyDateField.PUBLIC_HOLIDAYS,
    "modifier": FuzzyDateField.MODIFIER,
}


def build_struct(args: argparse.Namespace) -> dict[str, Any]:
    """Build the NLU-shaped parameter struct from parsed options."""
    fields: dict[str, Any] = {}
    for option, field in OPTION_FIELDS.items():
        value = getattr(args, option)
        if value is not None:
            fields[field.value] = {"stringValue": str(value), "kind": "stringValue"}
    return {"fields": fields}


def easter_year(value: str) -> int:
    """argparse type for --easter: a year date() can represent."""
    try:
        year = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid year: {value!r}") from None
    if not MINYEAR <= year <= MAXYEAR:
        raise argparse.ArgumentTypeError(f"year must be between {MINYEAR} and {MAXYEAR}")
    return year


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzy-dates",
        description="Resolve a German fuzzy date expression to a calendar date",
    )
    parser.add_argument("--month", type=str, help="German month name, e.g. 'März'")
    parser.add_argument("--season", type=str, help="Season, e.g. 'Frühjahr'")
    parser.add_argument("--relative", type=str, help="e.g. 'Nächste Woche'")
    parser.add_argument("--holiday", type=str, help="Public holiday, e.g. 'Ostermontag'")
    parser.add_argument(
        "--modifier", type=str, help="Anfang, Mitte or Ende (default: Anfang)"
    )
    parser.add_argument("--year", type=str, help="Year (default: reference year)")
    parser.add_argument(
        "--reference",
        type=date.fromisoformat,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument(
        "--easter", type=easter_year, metavar="YEAR", help="Print Easter Sunday of YEAR and exit"
    )
    parser.add_argument(
        "--list-holidays", action="store_true", help="Print recognized holiday names and exit"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default: LOG_LEVEL setting)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)

    if args.easter is not None:
        print(compute_easter_sunday(args.easter).isoformat())
        return 0

    if args.list_holidays:
        calendar = load_holiday_calendar(get_settings().holidays_file)
        for name in calendar.names():
            print(name)
        return 0

    resolver = FuzzyDateResolver()
    try:
        result = resolver.resolve(build_struct(args), reference_date=args.reference)
    except InvalidFuzzyDateError as exc:
        logger.info("fuzzy_date_rejected", error=exc.message)
        print(f"Error: {exc.message}", file=sys.stderr)
        return EXIT_INVALID

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        print(result.to_display_string())
    return 0


if __name__ == "__main__":
    sys.exit(main())
