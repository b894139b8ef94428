"""Week grid construction.

Turns a birthdate, "today" and an event list into the ordered cells the
timeline shows. Every cell is classified as future, lived, or lived with
events, carries an intensity tier derived from its event count, and is
flagged when its window contains today.

The unfiltered grid runs from week 0 to ``weeks_lived + look_ahead_weeks``
(capped at the expected lifespan), both ends inclusive. With a category
filter active the grid collapses to only the weeks holding a matching
event.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from lifeweeks.timeline.aggregate import attachment_count, group_by_week
from lifeweeks.timeline.filters import filter_by_category
from lifeweeks.timeline.weeks import (
    EXPECTED_LIFESPAN_WEEKS,
    LOOK_AHEAD_WEEKS,
    week_window,
    weeks_between,
)


class ZoomLevel(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def weeks_per_unit(self) -> int:
        return WEEKS_PER_UNIT[self]

    @property
    def detail(self) -> str:
        """How much of each week's events the view shows."""
        return ZOOM_DETAIL[self]


WEEKS_PER_UNIT: dict[ZoomLevel, int] = {
    ZoomLevel.WEEK: 1,
    ZoomLevel.MONTH: 4,
    ZoomLevel.QUARTER: 13,
    ZoomLevel.YEAR: 52,
}

ZOOM_DETAIL: dict[ZoomLevel, str] = {
    ZoomLevel.WEEK: "full",  # titles inline
    ZoomLevel.MONTH: "bars",
    ZoomLevel.QUARTER: "dots",
    ZoomLevel.YEAR: "minimal",
}


class WeekState(str, Enum):
    FUTURE = "future"
    LIVED = "lived"
    LIVED_WITH_EVENTS = "lived_with_events"


class IntensityTier(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def intensity_for(event_count: int) -> IntensityTier:
    """1 event is low, 2-3 medium, 4 or more high."""
    if event_count <= 0:
        return IntensityTier.NONE
    if event_count == 1:
        return IntensityTier.LOW
    if event_count <= 3:
        return IntensityTier.MEDIUM
    return IntensityTier.HIGH


@dataclass(frozen=True)
class WeekCell:
    """One rendered week."""

    week_index: int
    start: date
    end: date
    events: tuple = ()
    attachment_count: int = 0
    state: WeekState = WeekState.LIVED
    intensity: IntensityTier = IntensityTier.NONE
    is_current: bool = False

    @property
    def event_count(self) -> int:
        return len(self.events)

    @property
    def is_lived(self) -> bool:
        return self.state is not WeekState.FUTURE

    def as_dict(self) -> dict[str, Any]:
        return {
            "week_index": self.week_index,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "state": self.state.value,
            "intensity": self.intensity.value,
            "is_current": self.is_current,
            "event_count": self.event_count,
            "attachment_count": self.attachment_count,
            "events": [_event_summary(event) for event in self.events],
        }


def _event_summary(event) -> dict[str, Any]:
    category = event.category
    return {
        "id": str(event.id),
        "title": event.title,
        "date": event.date.isoformat(),
        "category": getattr(category, "value", category),
        "color": event.color,
    }


@dataclass
class TimelineGrid:
    birthdate: date
    today: date
    zoom: ZoomLevel
    weeks_lived: int
    lifespan_weeks: int
    filtered: bool
    event_count: int
    cells: list[WeekCell] = field(default_factory=list)

    @property
    def units(self) -> list[list[WeekCell]]:
        """Cells chunked by the zoom level's weeks per unit."""
        size = self.zoom.weeks_per_unit
        return [self.cells[i:i + size] for i in range(0, len(self.cells), size)]

    @property
    def life_progress(self) -> int:
        return round(100 * self.weeks_lived / self.lifespan_weeks)

    def as_dict(self) -> dict[str, Any]:
        return {
            "birthdate": self.birthdate.isoformat(),
            "today": self.today.isoformat(),
            "zoom": self.zoom.value,
            "weeks_per_unit": self.zoom.weeks_per_unit,
            "detail": self.zoom.detail,
            "weeks_lived": self.weeks_lived,
            "lifespan_weeks": self.lifespan_weeks,
            "life_progress": self.life_progress,
            "filtered": self.filtered,
            "event_count": self.event_count,
            "cells": [cell.as_dict() for cell in self.cells],
        }


def visible_weeks(
    birthdate: date,
    today: date,
    events: Sequence,
    active_categories: Collection = (),
    lifespan_weeks: int = EXPECTED_LIFESPAN_WEEKS,
    look_ahead_weeks: int = LOOK_AHEAD_WEEKS,
) -> list[int]:
    """Ordered week indices to render."""
    if active_categories:
        matching = filter_by_category(events, active_categories)
        return sorted({weeks_between(birthdate, event.date) for event in matching})

    last = min(lifespan_weeks, weeks_between(birthdate, today) + look_ahead_weeks)
    return list(range(0, last + 1))


def classify_week(
    birthdate: date,
    today: date,
    week_index: int,
    week_events: Sequence,
    weeks_lived: int,
) -> WeekCell:
    window = week_window(birthdate, week_index)
    count = len(week_events)
    if week_index > weeks_lived:
        state = WeekState.FUTURE
    elif count:
        state = WeekState.LIVED_WITH_EVENTS
    else:
        state = WeekState.LIVED
    return WeekCell(
        week_index=week_index,
        start=window.start,
        end=window.end,
        events=tuple(week_events),
        attachment_count=attachment_count(week_events),
        state=state,
        intensity=intensity_for(count),
        is_current=window.contains(today),
    )


def build_grid(
    birthdate: date,
    today: date,
    events: Sequence,
    zoom: ZoomLevel = ZoomLevel.MONTH,
    active_categories: Collection = (),
    lifespan_weeks: int = EXPECTED_LIFESPAN_WEEKS,
    look_ahead_weeks: int = LOOK_AHEAD_WEEKS,
) -> TimelineGrid:
    """Build the classified grid for one timeline view."""
    filtered = filter_by_category(events, active_categories)
    by_week = group_by_week(filtered, birthdate)
    weeks_lived = weeks_between(birthdate, today)

    cells = [
        classify_week(birthdate, today, week_index, by_week.get(week_index, ()), weeks_lived)
        for week_index in visible_weeks(
            birthdate,
            today,
            events,
            active_categories,
            lifespan_weeks=lifespan_weeks,
            look_ahead_weeks=look_ahead_weeks,
        )
    ]

    return TimelineGrid(
        birthdate=birthdate,
        today=today,
        zoom=zoom,
        weeks_lived=weeks_lived,
        lifespan_weeks=lifespan_weeks,
        filtered=bool(active_categories),
        event_count=len(filtered),
        cells=cells,
    )
