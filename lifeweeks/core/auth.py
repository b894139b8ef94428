"""Current-user resolution.

Authentication happens upstream; requests arrive with the user id in
``settings.user_header``. The timeline only needs "current user id or
none" and the matching profile.
"""

from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from lifeweeks.core.config import settings
from lifeweeks.core.database import get_session
from lifeweeks.models import UserProfile


def get_current_user_id(request: Request) -> UUID | None:
    """User id from the identity header, or None if absent or malformed."""
    raw = request.headers.get(settings.user_header)
    if not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        return None


def require_user_id(user_id: UUID | None = Depends(get_current_user_id)) -> UUID:
    if user_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id


def require_profile(
    user_id: UUID = Depends(require_user_id),
    session: Session = Depends(get_session),
) -> UserProfile:
    """Profile of the current user; 404 until one has been created."""
    profile = session.get(UserProfile, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
