"""Per-week event aggregation."""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date
from typing import TypeVar

from lifeweeks.timeline.weeks import week_window, weeks_between

T = TypeVar("T")


def events_in_week(events: Iterable[T], birthdate: date, week_index: int) -> list[T]:
    """Events dated inside ``week_index``'s window, in their original order."""
    window = week_window(birthdate, week_index)
    return [event for event in events if window.contains(event.date)]


def group_by_week(events: Iterable[T], birthdate: date) -> dict[int, list[T]]:
    """Map each week index to its events.

    Each event lands in exactly one bucket, the same one ``events_in_week``
    would place it in. Bucket order follows input order.
    """
    buckets: dict[int, list[T]] = defaultdict(list)
    for event in events:
        buckets[weeks_between(birthdate, event.date)].append(event)
    return dict(buckets)


def attachment_count(events: Sequence) -> int:
    """Total number of attachments across ``events``."""
    return sum(len(event.attachments or ()) for event in events)
