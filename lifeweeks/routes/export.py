"""Export routes: JSON document, CSV table, and PNG grid image."""
from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from sqlmodel import Session

from lifeweeks.core.auth import require_profile
from lifeweeks.core.database import get_session
from lifeweeks.models import EventCategory, UserProfile
from lifeweeks.render.image import render_grid_png
from lifeweeks.routes.timeline import lifespan_weeks, timeline_grid
from lifeweeks.services.events import list_events
from lifeweeks.timeline.export import export_csv, export_filename, export_json
from lifeweeks.timeline.grid import ZoomLevel
from lifeweeks.timeline.stats import compute_life_statistics

router = APIRouter(prefix="/export", tags=["export"])


def _download_headers(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/json")
async def export_as_json(
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    Download the full timeline as JSON.

    Includes the profile, a statistics snapshot, and every event with its
    attachment metadata.
    """
    now = datetime.now(UTC)
    events = list_events(session, profile.id)
    stats = compute_life_statistics(
        profile.birthdate, events, now.date(), lifespan_weeks=lifespan_weeks()
    )
    return JSONResponse(
        export_json(profile, events, stats, now),
        headers=_download_headers(
            export_filename(profile.full_name, "life_timeline", now.date(), "json")
        ),
    )


@router.get("/csv")
async def export_as_csv(
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """Download one CSV row per event."""
    events = list_events(session, profile.id)
    return Response(
        content=export_csv(events),
        media_type="text/csv",
        headers=_download_headers(
            export_filename(profile.full_name, "events", date.today(), "csv")
        ),
    )


@router.get("/png")
async def export_as_png(
    categories: list[EventCategory] = Query(default=[]),
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """Download the week grid as a PNG image."""
    today = date.today()
    grid = timeline_grid(session, profile, ZoomLevel.YEAR, categories, today)
    return Response(
        content=render_grid_png(grid, title=profile.full_name),
        media_type="image/png",
        headers=_download_headers(
            export_filename(profile.full_name, "timeline", today, "png")
        ),
    )
