"""Meteorological season boundaries used for season-based fuzzy dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from fuzzy_dates.parameters import normalize_key


@dataclass(frozen=True)
class Season:
    """A season as (month, day) boundaries; ``end_next_year`` spans New Year."""

    name: str
    begin: tuple[int, int]
    end: tuple[int, int]
    end_next_year: bool = False

    def begin_date(self, year: int) -> date:
        return date(year, *self.begin)

    def end_date(self, year: int) -> date:
        return date(year + 1 if self.end_next_year else year, *self.end)

    def middle_date(self, year: int) -> date:
        """Midpoint in whole days, rounded down toward the begin date."""
        begin = self.begin_date(year)
        span = self.end_date(year) - begin
        return begin + timedelta(days=span.days // 2)


# See http://www.aktuelle-sonne.de/html/jahreszeiten.html for the seasons and
# https://www.wetter.com/wetterlexikon/hochsommer_aid_570f4f31cebfc0060e8b46de.html
# for Hochsommer
SEASONS: dict[str, Season] = {
    season.name.casefold(): season
    for season in (
        Season("Frühjahr", begin=(3, 21), end=(6, 20)),
        Season("Sommer", begin=(6, 21), end=(9, 22)),
        Season("Herbst", begin=(9, 23), end=(12, 20)),
        Season("Winter", begin=(12, 21), end=(3, 20), end_next_year=True),
        Season("Hochsommer", begin=(7, 1), end=(8, 15)),
    )
}

# Spoken synonyms mapped to a season name
SEASON_ALIASES = {
    "frühling": "frühjahr",
    "fruehling": "frühjahr",
    "fruehjahr": "frühjahr",
}


def lookup_season(name: str) -> Season | None:
    """Return the season for a (case-insensitive) German name, if known."""
    key = normalize_key(name)
    return SEASONS.get(SEASON_ALIASES.get(key, key))
