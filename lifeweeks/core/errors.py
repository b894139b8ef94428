"""Exceptions raised by the service layer.

Routes translate these into HTTP errors whose detail names the failed
action, so every repository failure reaches the user as a notification
instead of taking the session down.
"""

from uuid import UUID


class LifeWeeksError(Exception):
    """Base class for application errors."""


class NotFoundError(LifeWeeksError):
    """A requested row does not exist or is not owned by the caller."""


class FileValidationError(LifeWeeksError):
    """An upload was rejected before touching the blob store."""


class StorageError(LifeWeeksError):
    """The blob store could not complete an operation."""


class AttachmentError(LifeWeeksError):
    """An attachment upload or delete failed.

    Attributes:
        action: "upload" or "delete".
    """

    def __init__(self, action: str, message: str):
        super().__init__(message)
        self.action = action


class EventDeleteError(LifeWeeksError):
    """An event could not be deleted because some attachments remain.

    Attributes:
        failed_attachment_ids: Attachments whose blobs could not be removed.
            Their metadata rows, and the event row, are still in place.
    """

    def __init__(self, failed_attachment_ids: list[UUID]):
        super().__init__(
            f"{len(failed_attachment_ids)} attachment(s) could not be removed"
        )
        self.failed_attachment_ids = failed_attachment_ids
