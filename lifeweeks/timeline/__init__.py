"""Week-grid timeline engine.

Pure functions over in-memory data: no database, no I/O, no clock. Every
function takes the birthdate, the event list and "today" explicitly.
"""

from lifeweeks.timeline.weeks import (
    EXPECTED_LIFESPAN_WEEKS,
    LOOK_AHEAD_WEEKS,
    WEEKS_PER_YEAR,
    WeekWindow,
    week_window,
    weeks_between,
)

__all__ = [
    "EXPECTED_LIFESPAN_WEEKS",
    "LOOK_AHEAD_WEEKS",
    "WEEKS_PER_YEAR",
    "WeekWindow",
    "week_window",
    "weeks_between",
]
