"""Upload policy: size cap and MIME allow-list.

Every upload path calls ``validate_file`` before writing anything to the
blob store.
"""

import math

from lifeweeks.core.errors import FileValidationError

MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MiB

ALLOWED_MIME_TYPES: frozenset[str] = frozenset({
    # Images
    "image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp", "image/svg+xml",
    # Documents
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain", "text/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    # Audio
    "audio/mpeg", "audio/wav", "audio/ogg", "audio/mp4",
    # Video
    "video/mp4", "video/mpeg", "video/quicktime", "video/x-msvideo",
    # Archives
    "application/zip", "application/x-rar-compressed", "application/x-7z-compressed",
})


def validate_file(size: int, mime_type: str | None, max_size: int = MAX_FILE_SIZE) -> None:
    """Raise FileValidationError if the file may not be uploaded."""
    if size > max_size:
        raise FileValidationError(
            f"File size must be less than {max_size // (1024 * 1024)}MB"
        )
    if (mime_type or "").lower() not in ALLOWED_MIME_TYPES:
        raise FileValidationError(f"File type not supported: {mime_type or 'unknown'}")


def file_kind(mime_type: str) -> str:
    """Coarse kind used for icons and previews."""
    if mime_type.startswith("image/"):
        return "image"
    if mime_type.startswith("video/"):
        return "video"
    if mime_type.startswith("audio/"):
        return "audio"
    if mime_type == "application/pdf":
        return "pdf"
    if "word" in mime_type or "document" in mime_type:
        return "document"
    if "excel" in mime_type or "spreadsheet" in mime_type:
        return "spreadsheet"
    if any(marker in mime_type for marker in ("zip", "rar", "7z")):
        return "archive"
    return "file"


def format_file_size(size: int) -> str:
    """Human-readable size, e.g. ``1.5 MB``."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    exponent = min(int(math.log(size, 1024)), len(units) - 1)
    value = round(size / 1024 ** exponent, 2)
    return f"{value:g} {units[exponent]}"
