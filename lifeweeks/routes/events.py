"""Event routes for creating, reading, updating and deleting life events."""
import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from lifeweeks.core.auth import require_profile
from lifeweeks.core.database import get_session
from lifeweeks.core.errors import EventDeleteError, NotFoundError
from lifeweeks.core.scheduler import check_anniversaries
from lifeweeks.models import EventCategory, UserProfile
from lifeweeks.models.event import EventCreate, EventRead, EventUpdate
from lifeweeks.services import events as event_service
from lifeweeks.storage.blob import BlobStore, get_blob_store
from lifeweeks.timeline.aggregate import attachment_count, events_in_week
from lifeweeks.timeline.filters import filter_by_category
from lifeweeks.timeline.grid import intensity_for
from lifeweeks.timeline.weeks import week_window, weeks_between

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


def _get_event_or_404(session: Session, profile: UserProfile, event_id: UUID):
    try:
        return event_service.get_event(session, profile.id, event_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")


@router.get("", response_model=list[EventRead])
async def list_events(
    categories: list[EventCategory] = Query(default=[]),
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    List the current user's events, oldest first.

    Optional ``categories`` restrict the list; none selected means all.
    """
    events = event_service.list_events(session, profile.id)
    return filter_by_category(events, categories)


@router.post("", response_model=EventRead, status_code=201)
async def create_event(
    data: EventCreate,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """Create an event; its week number is derived from the profile birthdate."""
    try:
        return event_service.create_event(session, profile, data)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to create event: {e}")
        raise HTTPException(status_code=500, detail="Failed to create event")


@router.get("/anniversaries")
async def anniversaries(
    today: date | None = None,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    List anniversaries falling on ``today``.

    Only events flagged ``notify_on_anniversary`` are reported.
    """
    today = today or date.today()
    return check_anniversaries(session, today, profile.id)


@router.get("/week/{week_index}")
async def week_details(
    week_index: int,
    categories: list[EventCategory] = Query(default=[]),
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    Show one week of the timeline.

    Returns the week's date window, its events (respecting the category
    filter), and attachment totals.
    """
    events = filter_by_category(event_service.list_events(session, profile.id), categories)
    week_events = events_in_week(events, profile.birthdate, week_index)
    window = week_window(profile.birthdate, week_index)
    today = date.today()

    return {
        "week_index": week_index,
        "start": window.start.isoformat(),
        "end": window.end.isoformat(),
        "is_current": window.contains(today),
        "is_lived": week_index <= weeks_between(profile.birthdate, today),
        "intensity": intensity_for(len(week_events)).value,
        "attachment_count": attachment_count(week_events),
        "events": [EventRead.model_validate(event) for event in week_events],
    }


@router.get("/{event_id}", response_model=EventRead)
async def get_event(
    event_id: UUID,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """Return a single event with its attachments."""
    return _get_event_or_404(session, profile, event_id)


@router.patch("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: UUID,
    data: EventUpdate,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """Update an event; changing its date recomputes its week number."""
    event = _get_event_or_404(session, profile, event_id)
    try:
        return event_service.update_event(session, profile, event, data)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to update event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update event")


@router.delete("/{event_id}")
async def delete_event(
    event_id: UUID,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
    store: BlobStore = Depends(get_blob_store),
):
    """
    Delete an event and all of its attachments.

    Returns 502 if any attachment file could not be removed. In that case
    the event and the affected attachments are kept so the delete can be
    retried.
    """
    event = _get_event_or_404(session, profile, event_id)
    try:
        stats = await event_service.delete_event(session, store, event)
    except EventDeleteError as e:
        raise HTTPException(
            status_code=502,
            detail={
                "message": "Failed to delete event",
                "remaining_attachments": [str(i) for i in e.failed_attachment_ids],
            },
        )
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to delete event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete event")

    return {"success": True, "event_id": str(event_id), **stats}
