"""Machine-readable exports: a structured JSON document and a flat CSV.

Both are built from the profile, the full event list (with attachment
metadata loaded) and a statistics snapshot. Image rendering lives in
``lifeweeks.render``.
"""

import csv
import io
import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from lifeweeks import __version__
from lifeweeks.timeline.stats import LifeStatistics

EXPORTED_BY = "Life in Weeks Timeline"

CSV_HEADERS = [
    "Date",
    "Week Number",
    "Title",
    "Description",
    "Category",
    "Color",
    "Has Attachments",
    "Attachment Count",
    "Notify on Anniversary",
    "Created At",
]


def _category_value(event) -> str:
    return getattr(event.category, "value", event.category)


def _isoformat(value) -> str | None:
    return value.isoformat() if value is not None else None


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def export_filename(full_name: str, kind: str, today: date, extension: str) -> str:
    """``Jane_Doe_life_timeline_2024-05-01.json`` style download name."""
    safe_name = re.sub(r"\s+", "_", full_name.strip()) or "timeline"
    return f"{safe_name}_{kind}_{today.isoformat()}.{extension}"


def serialize_event(event) -> dict[str, Any]:
    return {
        "id": str(event.id),
        "title": event.title,
        "description": event.description,
        "date": event.date.isoformat(),
        "category": _category_value(event),
        "color": event.color,
        "week_number": event.week_number,
        "notify_on_anniversary": event.notify_on_anniversary,
        "attachments": [
            {
                "file_name": attachment.file_name,
                "file_size": attachment.file_size,
                "mime_type": attachment.mime_type,
                "upload_date": _isoformat(attachment.upload_date),
                "description": attachment.description,
            }
            for attachment in event.attachments or ()
        ],
        "created_at": _isoformat(event.created_at),
    }


def export_json(
    profile,
    events: Sequence,
    stats: LifeStatistics,
    now: datetime,
) -> dict[str, Any]:
    """Structured export document (profile, statistics, events, metadata)."""
    return {
        "profile": {
            "name": profile.full_name,
            "email": profile.email,
            "birthdate": profile.birthdate.isoformat(),
            "export_date": now.isoformat(),
        },
        "statistics": stats.as_dict(),
        "events": [serialize_event(event) for event in events],
        "metadata": {
            "version": __version__,
            "exported_by": EXPORTED_BY,
            "total_events": len(events),
            "total_attachments": stats.total_attachments,
        },
    }


def export_csv(events: Sequence) -> str:
    """One row per event under ``CSV_HEADERS``."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for event in events:
        count = len(event.attachments or ())
        writer.writerow([
            event.date.isoformat(),
            event.week_number,
            event.title,
            event.description or "",
            _category_value(event),
            event.color,
            _yes_no(count > 0),
            count,
            _yes_no(event.notify_on_anniversary),
            _isoformat(event.created_at) or "",
        ])
    return buffer.getvalue()
