"""Blob storage for attachment bytes.

The service layer depends only on the ``BlobStore`` protocol: upload bytes
and get a storage path back, delete by path, and mint a time-limited URL.
``LocalBlobStore`` keeps files on disk under ``settings.storage_dir`` and
signs URLs with HMAC-SHA256 so ``/files/...`` can serve them without a
session.

All operations are coroutines; failures raise ``StorageError``.
"""

import hashlib
import hmac
import logging
import secrets
import time
from pathlib import Path, PurePosixPath
from typing import Protocol
from urllib.parse import quote, urlencode
from uuid import UUID

import aiofiles
import aiofiles.os

from lifeweeks.core.config import settings
from lifeweeks.core.errors import StorageError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    async def upload(self, data: bytes, owner_id: UUID, event_id: UUID, file_name: str) -> str: ...

    async def delete(self, storage_path: str) -> None: ...

    async def signed_url(self, storage_path: str, ttl_seconds: int) -> str: ...


def make_storage_path(owner_id: UUID, event_id: UUID, file_name: str) -> str:
    """``<owner>/<event>/<millis>-<random>.<ext>``; the original name is not reused."""
    suffix = PurePosixPath(file_name).suffix.lower()
    unique = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"
    return f"{owner_id}/{event_id}/{unique}{suffix}"


def sign(storage_path: str, expires: int, secret: str) -> str:
    message = f"{storage_path}:{expires}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


class LocalBlobStore:
    """Filesystem-backed blob store."""

    def __init__(
        self,
        root: Path,
        secret: str,
        url_prefix: str = "/files",
    ):
        self.root = Path(root)
        self.secret = secret
        self.url_prefix = url_prefix.rstrip("/")

    def resolve(self, storage_path: str) -> Path:
        """Absolute path for ``storage_path``, refusing anything outside root."""
        root = self.root.resolve()
        target = (root / storage_path).resolve()
        if not target.is_relative_to(root) or target == root:
            raise StorageError(f"Invalid storage path: {storage_path}")
        return target

    async def upload(self, data: bytes, owner_id: UUID, event_id: UUID, file_name: str) -> str:
        storage_path = make_storage_path(owner_id, event_id, file_name)
        target = self.resolve(storage_path)
        try:
            await aiofiles.os.makedirs(target.parent, exist_ok=True)
            async with aiofiles.open(target, "wb") as f:
                await f.write(data)
        except OSError as e:
            logger.error(f"Blob upload failed for {storage_path}: {e}")
            raise StorageError(f"Could not store {file_name}") from e
        logger.info(f"Stored blob {storage_path} ({len(data)} bytes)")
        return storage_path

    async def delete(self, storage_path: str) -> None:
        target = self.resolve(storage_path)
        try:
            await aiofiles.os.remove(target)
        except FileNotFoundError:
            # Already gone; the metadata row can go too
            logger.warning(f"Blob {storage_path} was already missing")
        except OSError as e:
            logger.error(f"Blob delete failed for {storage_path}: {e}")
            raise StorageError(f"Could not delete {storage_path}") from e
        else:
            logger.info(f"Deleted blob {storage_path}")

    async def read(self, storage_path: str) -> bytes:
        target = self.resolve(storage_path)
        try:
            async with aiofiles.open(target, "rb") as f:
                return await f.read()
        except OSError as e:
            raise StorageError(f"Could not read {storage_path}") from e

    async def signed_url(self, storage_path: str, ttl_seconds: int) -> str:
        expires = int(time.time()) + ttl_seconds
        query = urlencode({
            "expires": expires,
            "signature": sign(storage_path, expires, self.secret),
        })
        return f"{self.url_prefix}/{quote(storage_path)}?{query}"

    def verify(self, storage_path: str, expires: int, signature: str, now: float | None = None) -> bool:
        """True if ``signature`` matches and ``expires`` has not passed."""
        if now is None:
            now = time.time()
        if expires < now:
            return False
        return hmac.compare_digest(sign(storage_path, expires, self.secret), signature)


_store: LocalBlobStore | None = None


def get_blob_store() -> LocalBlobStore:
    """Dependency returning the process-wide blob store."""
    global _store
    if _store is None:
        _store = LocalBlobStore(settings.storage_dir, settings.secret_key)
    return _store
