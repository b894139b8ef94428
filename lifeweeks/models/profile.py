"""User profile model.

One profile exists per user. Its birthdate is the origin for every week
index in the timeline.
"""

import datetime as dt
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from pydantic import field_validator
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lifeweeks.models.event import Event


class ProfileBase(SQLModel):
    full_name: str
    email: str
    birthdate: dt.date


class UserProfile(ProfileBase, table=True):
    """A user's profile.

    Attributes:
        id: The user id supplied by the identity provider.
        full_name: Display name, also used in export file names.
        email: Contact address.
        birthdate: Origin of all week arithmetic. Changing it requires
            every owned event's week_number to be recomputed.
        created_at: When the profile row was inserted.
        events: Life events owned by this user.
    """
    __tablename__ = "user_profile"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))

    events: list["Event"] = Relationship(back_populates="profile")


class ProfileCreate(ProfileBase):
    pass


class ProfileUpdate(SQLModel):
    full_name: str | None = None
    email: str | None = None
    birthdate: dt.date | None = None

    @field_validator("full_name", "email", "birthdate")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may be omitted but not set to null")
        return value


class ProfileRead(ProfileBase):
    id: UUID
    created_at: dt.datetime
