"""Profile routes for the current user's profile."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from lifeweeks.core.auth import require_profile, require_user_id
from lifeweeks.core.database import get_session
from lifeweeks.models import UserProfile
from lifeweeks.models.profile import ProfileCreate, ProfileRead, ProfileUpdate
from lifeweeks.services.events import recompute_week_numbers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.post("", response_model=ProfileRead, status_code=201)
async def create_profile(
    data: ProfileCreate,
    user_id: UUID = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    """
    Create the current user's profile.

    Each user has exactly one profile; returns 409 if it already exists.
    """
    if session.get(UserProfile, user_id):
        raise HTTPException(status_code=409, detail="Profile already exists")

    profile = UserProfile(id=user_id, **data.model_dump())
    session.add(profile)
    session.commit()
    session.refresh(profile)
    logger.info(f"Created profile {profile.id}")
    return profile


@router.get("", response_model=ProfileRead)
async def read_profile(profile: UserProfile = Depends(require_profile)):
    """Return the current user's profile."""
    return profile


@router.patch("", response_model=ProfileRead)
async def update_profile(
    data: ProfileUpdate,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """
    Update the current user's profile.

    A new birthdate moves the origin of the whole timeline, so every
    event's week number is recomputed in the same transaction.
    """
    changes = data.model_dump(exclude_unset=True)
    birthdate_changed = "birthdate" in changes and changes["birthdate"] != profile.birthdate

    for key, value in changes.items():
        setattr(profile, key, value)
    session.add(profile)

    try:
        if birthdate_changed:
            recompute_week_numbers(session, profile)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to update profile {profile.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update profile")

    session.refresh(profile)
    return profile
