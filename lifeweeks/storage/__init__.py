from lifeweeks.storage.blob import BlobStore, LocalBlobStore, get_blob_store
from lifeweeks.storage.validation import ALLOWED_MIME_TYPES, MAX_FILE_SIZE, validate_file

__all__ = [
    "ALLOWED_MIME_TYPES",
    "BlobStore",
    "LocalBlobStore",
    "MAX_FILE_SIZE",
    "get_blob_store",
    "validate_file",
]
