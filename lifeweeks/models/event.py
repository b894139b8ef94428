"""Life event model.

Events are the user's own records on the timeline. ``week_number`` is
derived from the event date and the owner's birthdate and is recomputed
by the service layer whenever either changes; it is never edited directly.
"""

import datetime as dt
import re
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from pydantic import field_validator
from sqlmodel import Field, Relationship, SQLModel

from lifeweeks.models.attachment import AttachmentRead
from lifeweeks.models.enums import EventCategory

if TYPE_CHECKING:
    from lifeweeks.models.attachment import Attachment
    from lifeweeks.models.profile import UserProfile

COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _check_color(value: str | None) -> str | None:
    if value is not None and not COLOR_PATTERN.match(value):
        raise ValueError(f"Invalid color value: {value!r}")
    return value


def _not_null(value):
    if value is None:
        raise ValueError("Field may be omitted but not set to null")
    return value


class EventBase(SQLModel):
    title: str
    description: str | None = None
    date: dt.date
    category: EventCategory = EventCategory.OTHER
    color: str = EventCategory.OTHER.color
    notify_on_anniversary: bool = False


class Event(EventBase, table=True):
    """A life event on the user's timeline.

    Attributes:
        id: Unique identifier (UUID).
        user_id: Owner's profile id.
        title: Short title, shown inline in week view. Also the key used
            to hide already-imported historical entries.
        description: Optional free text.
        date: The real-world date of the event.
        week_number: Weeks between the owner's birthdate and ``date``.
        category: One of the fixed EventCategory values.
        color: Display color (hex).
        notify_on_anniversary: Whether the anniversary job reports it.
        created_at: When the row was inserted.
        attachments: Files attached to this event, oldest upload first.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="user_profile.id", index=True)
    week_number: int = Field(default=0, index=True)
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))

    profile: Optional["UserProfile"] = Relationship(back_populates="events")
    attachments: list["Attachment"] = Relationship(
        back_populates="event",
        sa_relationship_kwargs={"order_by": "Attachment.upload_date"},
    )


class EventCreate(EventBase):
    @field_validator("color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        return _check_color(value)


class EventUpdate(SQLModel):
    title: str | None = None
    description: str | None = None
    date: dt.date | None = None
    category: EventCategory | None = None
    color: str | None = None
    notify_on_anniversary: bool | None = None

    @field_validator("title", "date", "category", "color", "notify_on_anniversary")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: str | None) -> str | None:
        return _check_color(value)


class EventRead(EventBase):
    id: UUID
    user_id: UUID
    week_number: int
    created_at: dt.datetime
    attachments: list[AttachmentRead] = []
