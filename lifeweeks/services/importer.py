"""Batch import of historical catalog entries as user events."""

import logging
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from lifeweeks.models import UserProfile
from lifeweeks.models.event import EventCreate
from lifeweeks.services.events import create_event
from lifeweeks.timeline.catalog import HistoricalEvent, catalog_entry_to_event

logger = logging.getLogger(__name__)


def import_catalog_entries(
    session: Session,
    profile: UserProfile,
    entries: Iterable[HistoricalEvent],
) -> dict:
    """Create one event per catalog entry.

    Each creation stands alone: a failure is counted and the batch moves
    on, and earlier successes are not rolled back.

    Returns dict with import statistics.
    """
    stats = {"requested": 0, "created": 0, "failed": 0, "created_ids": []}

    for entry in entries:
        stats["requested"] += 1
        try:
            event = create_event(session, profile, EventCreate(**catalog_entry_to_event(entry)))
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to import catalog entry {entry.id}: {e}")
            stats["failed"] += 1
            continue
        stats["created"] += 1
        stats["created_ids"].append(str(event.id))

    logger.info(
        f"Imported catalog entries for {profile.id}: "
        f"{stats['created']} created, {stats['failed']} failed"
    )
    return stats
