"""Date and week-index arithmetic.

All week indices in the application come from ``weeks_between``: event
week numbers, grid cells, filter collapsing and statistics. A week is the
half-open interval ``[birthdate + 7*i, birthdate + 7*(i+1))``.
"""

from datetime import date, timedelta
from typing import NamedTuple

ASSUMED_LIFESPAN_YEARS = 80
WEEKS_PER_YEAR = 52
EXPECTED_LIFESPAN_WEEKS = ASSUMED_LIFESPAN_YEARS * WEEKS_PER_YEAR
LOOK_AHEAD_WEEKS = 10 * WEEKS_PER_YEAR


class WeekWindow(NamedTuple):
    """Half-open date interval covered by one week index."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


def days_between(start: date, end: date) -> int:
    return (end - start).days


def weeks_between(start: date, end: date) -> int:
    """Number of complete 7-day periods from ``start`` to ``end``.

    Floor semantics: 6 days after ``start`` is week 0, 7 days is week 1.
    Dates before ``start`` give negative indices.
    """
    return days_between(start, end) // 7


def week_window(birthdate: date, week_index: int) -> WeekWindow:
    """Date interval ``[start, end)`` for ``week_index``."""
    start = birthdate + timedelta(weeks=week_index)
    return WeekWindow(start, start + timedelta(weeks=1))


def add_years(day: date, years: int) -> date:
    """Same month and day ``years`` later; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def years_between(start: date, end: date) -> int:
    """Complete calendar years from ``start`` to ``end`` (age in years)."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
