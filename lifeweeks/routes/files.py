"""Signed file downloads.

URLs minted by the blob store carry ``expires`` and ``signature`` query
parameters; no session is needed to follow them until they expire.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlmodel import Session, select

from lifeweeks.core.database import get_session
from lifeweeks.core.errors import StorageError
from lifeweeks.models import Attachment
from lifeweeks.storage.blob import LocalBlobStore, get_blob_store

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/{storage_path:path}")
async def download_file(
    storage_path: str,
    expires: int,
    signature: str,
    session: Session = Depends(get_session),
    store: LocalBlobStore = Depends(get_blob_store),
):
    """Serve an attachment if its signed URL is valid and unexpired."""
    if not store.verify(storage_path, expires, signature):
        raise HTTPException(status_code=403, detail="Link is invalid or has expired")

    attachment = session.exec(
        select(Attachment).where(Attachment.storage_path == storage_path)
    ).first()
    if not attachment:
        raise HTTPException(status_code=404, detail="File not found")

    try:
        data = await store.read(storage_path)
    except StorageError:
        raise HTTPException(status_code=404, detail="File not found")

    return Response(
        content=data,
        media_type=attachment.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{attachment.file_name}"'},
    )
