"""Life statistics for the dashboard and export reports."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any

from lifeweeks.timeline.aggregate import attachment_count
from lifeweeks.timeline.weeks import (
    EXPECTED_LIFESPAN_WEEKS,
    days_between,
    weeks_between,
    years_between,
)


@dataclass(frozen=True)
class LifeStatistics:
    total_weeks: int
    total_days: int
    age_years: int
    life_progress: int
    total_events: int
    by_category: dict[str, int] = field(default_factory=dict)
    by_year: dict[int, int] = field(default_factory=dict)
    most_active_year: tuple[int, int] | None = None
    top_category: tuple[str, int] | None = None
    events_this_year: int = 0
    with_reminders: int = 0
    average_per_year: float = 0.0
    total_attachments: int = 0
    events_with_attachments: int = 0
    attachments_per_event: float = 0.0

    def as_dict(self) -> dict[str, Any]:
        """Nested JSON-friendly form used by the API and the JSON export."""
        data = asdict(self)
        return {
            "basic": {
                "total_weeks": data["total_weeks"],
                "total_days": data["total_days"],
                "age_years": data["age_years"],
                "life_progress": data["life_progress"],
            },
            "events": {
                "total": data["total_events"],
                "by_category": data["by_category"],
                "by_year": {str(year): count for year, count in data["by_year"].items()},
                "most_active_year": (
                    {"year": self.most_active_year[0], "count": self.most_active_year[1]}
                    if self.most_active_year else None
                ),
                "top_category": (
                    {"category": self.top_category[0], "count": self.top_category[1]}
                    if self.top_category else None
                ),
                "this_year": data["events_this_year"],
                "with_reminders": data["with_reminders"],
                "average_per_year": data["average_per_year"],
            },
            "attachments": {
                "total": data["total_attachments"],
                "events_with_attachments": data["events_with_attachments"],
                "average_per_event": data["attachments_per_event"],
            },
        }


def _category_value(event) -> str:
    return getattr(event.category, "value", event.category)


def _most_common(histogram: dict) -> tuple | None:
    """Highest count; ties go to the smallest key."""
    if not histogram:
        return None
    key = min(histogram, key=lambda k: (-histogram[k], k))
    return key, histogram[key]


def compute_life_statistics(
    birthdate: date,
    events: Sequence,
    today: date,
    lifespan_weeks: int = EXPECTED_LIFESPAN_WEEKS,
) -> LifeStatistics:
    """Statistics over the full, unfiltered event list.

    Ratios use a denominator of at least 1, so a newborn or an empty
    timeline yields zeros rather than errors.
    """
    total_weeks = weeks_between(birthdate, today)
    age_years = years_between(birthdate, today)

    by_category = dict(sorted(Counter(_category_value(e) for e in events).items()))
    by_year = dict(sorted(Counter(e.date.year for e in events).items()))
    total_attachments = attachment_count(events)

    return LifeStatistics(
        total_weeks=total_weeks,
        total_days=days_between(birthdate, today),
        age_years=age_years,
        life_progress=round(100 * total_weeks / lifespan_weeks),
        total_events=len(events),
        by_category=by_category,
        by_year=by_year,
        most_active_year=_most_common(by_year),
        top_category=_most_common(by_category),
        events_this_year=by_year.get(today.year, 0),
        with_reminders=sum(1 for e in events if e.notify_on_anniversary),
        average_per_year=len(events) / max(1, age_years),
        total_attachments=total_attachments,
        events_with_attachments=sum(1 for e in events if e.attachments),
        attachments_per_event=total_attachments / max(1, len(events)),
    )
