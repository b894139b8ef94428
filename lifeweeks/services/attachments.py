"""Attachment upload and removal.

Order matters in both directions:

- Upload writes the blob first and inserts the metadata row only if that
  succeeded, so no row ever points at nothing. If the row insert fails the
  blob is left orphaned; that is the lesser failure.
- Delete removes the blob first and drops the row only if that succeeded.
"""

import logging

from sqlmodel import Session

from lifeweeks.core.config import settings
from lifeweeks.core.errors import AttachmentError, StorageError
from lifeweeks.models import Attachment, Event
from lifeweeks.storage.blob import BlobStore
from lifeweeks.storage.validation import validate_file

logger = logging.getLogger(__name__)


async def upload_attachment(
    session: Session,
    store: BlobStore,
    event: Event,
    data: bytes,
    file_name: str,
    mime_type: str | None,
    description: str | None = None,
) -> Attachment:
    """Validate, store, and record a new attachment for ``event``.

    Raises:
        FileValidationError: The file is too large or of a disallowed type.
        AttachmentError: The blob store rejected the write.
    """
    validate_file(len(data), mime_type, settings.max_upload_bytes)

    try:
        storage_path = await store.upload(data, event.user_id, event.id, file_name)
    except StorageError as e:
        logger.error(f"Failed to upload {file_name} for event {event.id}: {e}")
        raise AttachmentError("upload", "Failed to upload file") from e

    attachment = Attachment(
        event_id=event.id,
        file_name=file_name,
        file_size=len(data),
        mime_type=mime_type,
        storage_path=storage_path,
        description=description or None,
    )
    session.add(attachment)
    session.commit()
    session.refresh(attachment)
    logger.info(f"Uploaded attachment {attachment.id} ({file_name}) to event {event.id}")
    return attachment


async def delete_attachment(session: Session, store: BlobStore, attachment: Attachment) -> None:
    """Remove the blob, then the row.

    Raises:
        AttachmentError: The blob could not be removed; the row is kept.
    """
    try:
        await store.delete(attachment.storage_path)
    except StorageError as e:
        logger.error(f"Failed to delete attachment {attachment.id}: {e}")
        raise AttachmentError("delete", "Failed to delete file") from e

    session.delete(attachment)
    session.commit()
    logger.info(f"Deleted attachment {attachment.id}")


async def attachment_url(
    store: BlobStore,
    attachment: Attachment,
    ttl_seconds: int | None = None,
) -> str:
    """Time-limited download URL for ``attachment``."""
    if ttl_seconds is None:
        ttl_seconds = settings.signed_url_ttl_seconds
    return await store.signed_url(attachment.storage_path, ttl_seconds)
