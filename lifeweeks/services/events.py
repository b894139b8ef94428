"""Event repository operations.

Functions here own the rules the record store cannot enforce by itself:
``week_number`` is always recomputed from the owner's birthdate, and an
event is only deleted once every attachment (blob and row) is gone.
"""

import calendar
import logging
from datetime import date
from uuid import UUID

from sqlalchemy import and_, extract, or_
from sqlmodel import Session, select

from lifeweeks.core.errors import EventDeleteError, NotFoundError, StorageError
from lifeweeks.models import Event, UserProfile
from lifeweeks.models.event import EventCreate, EventUpdate
from lifeweeks.storage.blob import BlobStore
from lifeweeks.timeline.weeks import weeks_between

logger = logging.getLogger(__name__)


def list_events(session: Session, user_id: UUID) -> list[Event]:
    """All events owned by ``user_id``, oldest first."""
    statement = (
        select(Event)
        .where(Event.user_id == user_id)
        .order_by(Event.date, Event.created_at)
    )
    return list(session.exec(statement).all())


def get_event(session: Session, user_id: UUID, event_id: UUID) -> Event:
    event = session.get(Event, event_id)
    if not event or event.user_id != user_id:
        raise NotFoundError("Event not found")
    return event


def create_event(session: Session, profile: UserProfile, data: EventCreate) -> Event:
    """Insert a new event with its week number derived from ``data.date``."""
    event = Event(
        **data.model_dump(),
        user_id=profile.id,
        week_number=weeks_between(profile.birthdate, data.date),
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    logger.info(f"Created event {event.id} '{event.title}' in week {event.week_number}")
    return event


def update_event(
    session: Session,
    profile: UserProfile,
    event: Event,
    data: EventUpdate,
) -> Event:
    """Apply the fields set in ``data``; a new date moves the event's week."""
    changes = data.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(event, key, value)
    if "date" in changes:
        event.week_number = weeks_between(profile.birthdate, event.date)
    session.add(event)
    session.commit()
    session.refresh(event)
    logger.info(f"Updated event {event.id}: {sorted(changes)}")
    return event


def recompute_week_numbers(session: Session, profile: UserProfile) -> int:
    """Re-derive week numbers after a birthdate change.

    Returns the number of events whose week number changed. Does not commit.
    """
    changed = 0
    for event in list_events(session, profile.id):
        week_number = weeks_between(profile.birthdate, event.date)
        if event.week_number != week_number:
            event.week_number = week_number
            session.add(event)
            changed += 1
    logger.info(f"Recomputed week numbers for {profile.id}: {changed} changed")
    return changed


async def delete_event(session: Session, store: BlobStore, event: Event) -> dict:
    """Delete an event and all of its attachments.

    Each attachment's blob is removed before its row. An attachment whose
    blob removal fails keeps its row, and the event row is then kept as
    well so the attachment never outlives it; ``EventDeleteError`` names
    the attachments that remain. Removals that did succeed are committed.

    Returns dict with deletion statistics.
    """
    stats = {"attachments_deleted": 0, "attachments_failed": 0}
    failed: list[UUID] = []

    for attachment in list(event.attachments):
        try:
            await store.delete(attachment.storage_path)
        except StorageError as e:
            logger.error(f"Failed to delete attachment {attachment.id} of event {event.id}: {e}")
            failed.append(attachment.id)
            stats["attachments_failed"] += 1
            continue
        session.delete(attachment)
        stats["attachments_deleted"] += 1

    if failed:
        session.commit()
        session.refresh(event)
        raise EventDeleteError(failed)

    session.delete(event)
    session.commit()
    logger.info(f"Deleted event {event.id}: {stats}")
    return stats


def anniversaries_on(session: Session, day: date, user_id: UUID | None = None) -> list[Event]:
    """Flagged events whose month and day match ``day`` in an earlier year.

    In non-leap years, events dated Feb 29 are reported on Feb 28.
    """
    same_day = and_(
        extract("month", Event.date) == day.month,
        extract("day", Event.date) == day.day,
    )
    if (day.month, day.day) == (2, 28) and not calendar.isleap(day.year):
        same_day = or_(
            same_day,
            and_(extract("month", Event.date) == 2, extract("day", Event.date) == 29),
        )

    statement = (
        select(Event)
        .where(Event.notify_on_anniversary == True)  # noqa: E712
        .where(same_day)
        .where(Event.date < day)
        .order_by(Event.date)
    )
    if user_id is not None:
        statement = statement.where(Event.user_id == user_id)
    return list(session.exec(statement).all())
