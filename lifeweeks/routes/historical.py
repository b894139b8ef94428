"""Historical catalog routes for browsing and importing curated events."""
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlmodel import Session

from lifeweeks.core.auth import require_profile
from lifeweeks.core.database import get_session
from lifeweeks.models import CatalogCategory, Significance, UserProfile
from lifeweeks.services.events import list_events
from lifeweeks.services.importer import import_catalog_entries
from lifeweeks.timeline.catalog import DEFAULT_SIGNIFICANCE, find_entries, match_catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/historical", tags=["historical"])


class ImportRequest(BaseModel):
    entry_ids: list[str]
    today: date | None = None


@router.get("")
async def list_candidates(
    categories: list[CatalogCategory] = Query(default=[]),
    significance: list[Significance] = Query(default=list(DEFAULT_SIGNIFICANCE)),
    include_life_stages: bool = True,
    today: date | None = None,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    List catalog entries that could be added to the timeline.

    Entries fall between the birthdate and today. Entries whose title
    already appears on the timeline (ignoring case) are left out.
    """
    existing_titles = [event.title for event in list_events(session, profile.id)]
    entries = match_catalog(
        profile.birthdate,
        today or date.today(),
        categories=categories,
        significance=significance,
        include_life_stages=include_life_stages,
        existing_titles=existing_titles,
    )
    return {"count": len(entries), "entries": [entry.as_dict() for entry in entries]}


@router.post("/import")
async def import_entries(
    request: ImportRequest,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    Add selected catalog entries to the timeline.

    Each entry becomes a new event on its own; one failure does not undo
    the others. Entries already on the timeline are skipped. Returns 500
    only if every attempted creation failed.
    """
    if not request.entry_ids:
        raise HTTPException(status_code=400, detail="Please select at least one event to add")

    existing = {event.title.lower() for event in list_events(session, profile.id)}
    entries = find_entries(request.entry_ids, profile.birthdate, request.today or date.today())
    new_entries = [entry for entry in entries if entry.title.lower() not in existing]

    stats = import_catalog_entries(session, profile, new_entries)
    stats["skipped"] = len(request.entry_ids) - len(new_entries)

    if stats["created"] == 0 and stats["failed"] > 0:
        raise HTTPException(status_code=500, detail="Failed to add historical events")

    return stats
