"""Attachment routes for uploading, listing and removing event files."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from lifeweeks.core.auth import require_profile
from lifeweeks.core.config import settings
from lifeweeks.core.database import get_session
from lifeweeks.core.errors import AttachmentError, FileValidationError, NotFoundError
from lifeweeks.models import Attachment, UserProfile
from lifeweeks.models.attachment import AttachmentRead
from lifeweeks.services import attachments as attachment_service
from lifeweeks.services.events import get_event
from lifeweeks.storage.blob import BlobStore, get_blob_store
from lifeweeks.storage.validation import validate_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events/{event_id}/attachments", tags=["attachments"])


def _event_or_404(session: Session, profile: UserProfile, event_id: UUID):
    try:
        return get_event(session, profile.id, event_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")


def _attachment_or_404(session: Session, event_id: UUID, attachment_id: UUID) -> Attachment:
    attachment = session.get(Attachment, attachment_id)
    if not attachment or attachment.event_id != event_id:
        raise HTTPException(status_code=404, detail="Attachment not found")
    return attachment


@router.post("", response_model=AttachmentRead, status_code=201)
async def upload_attachment(
    event_id: UUID,
    file: UploadFile = File(...),
    description: str | None = Form(None),
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
    store: BlobStore = Depends(get_blob_store),
):
    """
    Upload a file and attach it to an event.

    Rejects files over the size limit or outside the MIME allow-list with
    400. Returns 502 if the blob store write fails; no metadata is
    recorded in that case.
    """
    event = _event_or_404(session, profile, event_id)

    try:
        if file.size is not None:
            validate_file(file.size, file.content_type, settings.max_upload_bytes)
        # Bounded read: a file longer than the limit still fails validation
        data = await file.read(settings.max_upload_bytes + 1)
        return await attachment_service.upload_attachment(
            session,
            store,
            event,
            data,
            file_name=file.filename or "upload",
            mime_type=file.content_type,
            description=description,
        )
    except FileValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AttachmentError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to record attachment for event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to upload file")


@router.get("", response_model=list[AttachmentRead])
async def list_attachments(
    event_id: UUID,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
):
    """List an event's attachments in upload order."""
    return _event_or_404(session, profile, event_id).attachments


@router.delete("/{attachment_id}")
async def delete_attachment(
    event_id: UUID,
    attachment_id: UUID,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
    store: BlobStore = Depends(get_blob_store),
):
    """
    Delete an attachment.

    The file is removed first. If that fails the metadata is kept and
    502 is returned so the user can retry.
    """
    _event_or_404(session, profile, event_id)
    attachment = _attachment_or_404(session, event_id, attachment_id)

    try:
        await attachment_service.delete_attachment(session, store, attachment)
    except AttachmentError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {"success": True, "attachment_id": str(attachment_id)}


@router.get("/{attachment_id}/url")
async def attachment_url(
    event_id: UUID,
    attachment_id: UUID,
    profile: UserProfile = Depends(require_profile),
    session: Session = Depends(get_session),
    store: BlobStore = Depends(get_blob_store),
):
    """Return a signed download URL valid for ``signed_url_ttl_seconds``."""
    _event_or_404(session, profile, event_id)
    attachment = _attachment_or_404(session, event_id, attachment_id)

    url = await attachment_service.attachment_url(store, attachment)
    return {
        "url": url,
        "file_name": attachment.file_name,
        "expires_in": settings.signed_url_ttl_seconds,
    }
