"""Timeline routes: the week grid page, its JSON form, and life statistics."""
from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from lifeweeks.core.auth import require_profile
from lifeweeks.core.config import settings
from lifeweeks.core.database import get_session
from lifeweeks.models import EventCategory, UserProfile
from lifeweeks.services.events import list_events
from lifeweeks.timeline.grid import TimelineGrid, ZoomLevel, build_grid
from lifeweeks.timeline.stats import compute_life_statistics
from lifeweeks.timeline.weeks import WEEKS_PER_YEAR

router = APIRouter(prefix="/timeline", tags=["timeline"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def lifespan_weeks() -> int:
    return settings.expected_lifespan_years * WEEKS_PER_YEAR


def timeline_grid(
    session: Session,
    profile: UserProfile,
    zoom: ZoomLevel,
    categories: list[EventCategory],
    today: date,
) -> TimelineGrid:
    """Build the grid for ``profile`` from its current event list."""
    return build_grid(
        profile.birthdate,
        today,
        list_events(session, profile.id),
        zoom=zoom,
        active_categories=categories,
        lifespan_weeks=lifespan_weeks(),
        look_ahead_weeks=settings.look_ahead_weeks,
    )


@router.get("", response_class=HTMLResponse)
async def timeline_page(
    request: Request,
    zoom: ZoomLevel = ZoomLevel.MONTH,
    categories: list[EventCategory] = Query(default=[]),
    today: date | None = None,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    Display the life-in-weeks grid.

    Week view lists event titles in each cell, month view shows compact
    bars, quarter view color dots, and year view a single marker. Selecting
    categories collapses the grid to the weeks holding matching events.
    """
    today = today or date.today()
    grid = timeline_grid(session, profile, zoom, categories, today)

    return templates.TemplateResponse(
        request,
        "timeline.html",
        {
            "profile": profile,
            "grid": grid,
            "zoom_levels": list(ZoomLevel),
            "categories": list(EventCategory),
            "selected_categories": {c.value for c in categories},
            "today": today,
        },
    )


@router.get("/grid")
async def timeline_grid_json(
    zoom: ZoomLevel = ZoomLevel.MONTH,
    categories: list[EventCategory] = Query(default=[]),
    today: date | None = None,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """Return the classified week grid as JSON."""
    grid = timeline_grid(session, profile, zoom, categories, today or date.today())
    return grid.as_dict()


@router.get("/stats")
async def life_statistics(
    today: date | None = None,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """Return life statistics over all events (filters do not apply)."""
    stats = compute_life_statistics(
        profile.birthdate,
        list_events(session, profile.id),
        today or date.today(),
        lifespan_weeks=lifespan_weeks(),
    )
    return stats.as_dict()
