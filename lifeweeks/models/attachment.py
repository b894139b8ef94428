"""Attachment metadata model.

The file bytes live in the blob store; this row records where. A row is
only inserted after the blob write succeeded, and only removed after the
blob delete succeeded.
"""

import datetime as dt
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from lifeweeks.models.event import Event


class AttachmentBase(SQLModel):
    file_name: str
    file_size: int
    mime_type: str
    description: str | None = None


class Attachment(AttachmentBase, table=True):
    """A file attached to an event.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the owning Event.
        file_name: Original name of the uploaded file.
        file_size: Size in bytes.
        mime_type: Declared content type, checked against the allow-list.
        storage_path: Opaque locator in the blob store.
        upload_date: When the upload completed. Attachments are listed
            in this order.
        description: Optional caption.
        event: Reference to the owning Event.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", index=True)
    storage_path: str
    upload_date: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))

    event: Optional["Event"] = Relationship(back_populates="attachments")


class AttachmentRead(AttachmentBase):
    id: UUID
    event_id: UUID
    storage_path: str
    upload_date: dt.datetime
