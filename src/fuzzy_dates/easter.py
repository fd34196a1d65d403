"""Easter Sunday computation for movable German holidays."""

from datetime import date, timedelta


def compute_easter_sunday(year: int) -> date:
    """Return Easter Sunday of ``year`` using Gauss' Easter congruence.

    The constants M=24 and N=5 hold for the Gregorian years 1900-2099.
    """
    a = year % 19
    d = (19 * a + 24) % 30
    day_offset = d + (2 * (year % 4) + 4 * (year % 7) + 6 * d + 5) % 7

    # Without these two corrections Easter would land on April 26, or on
    # April 25 where April 18 is correct
    if day_offset == 35 or (day_offset == 34 and d == 28 and a > 10):
        day_offset -= 7

    return date(year, 3, 22) + timedelta(days=day_offset)


def easter_offset(year: int, days: int) -> date:
    """Return the date ``days`` whole days from Easter Sunday of ``year``."""
    return compute_easter_sunday(year) + timedelta(days=days)
