"""Category and significance filters.

An empty category selection means "no filter": the input comes back
unchanged. The timeline and the historical catalog both rely on this.
"""

from collections.abc import Collection, Iterable
from enum import Enum
from typing import TypeVar

T = TypeVar("T")


def _values(selection: Iterable) -> set[str]:
    return {item.value if isinstance(item, Enum) else str(item) for item in selection}


def _value(item) -> str:
    return item.value if isinstance(item, Enum) else str(item)


def filter_by_category(events: Iterable[T], active_categories: Collection) -> list[T]:
    """Events whose category is selected, or all events if none is."""
    events = list(events)
    if not active_categories:
        return events
    selected = _values(active_categories)
    return [event for event in events if _value(event.category) in selected]


def filter_by_significance(entries: Iterable[T], significance: Collection) -> list[T]:
    """Catalog entries whose significance is selected.

    Unlike categories, an empty significance selection selects nothing.
    """
    selected = _values(significance)
    return [entry for entry in entries if _value(entry.significance) in selected]
