"""Tests for the event, attachment and import services."""

import asyncio
from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from lifeweeks.core.errors import (
    AttachmentError,
    EventDeleteError,
    FileValidationError,
    NotFoundError,
    StorageError,
)
from lifeweeks.core.scheduler import check_anniversaries
from lifeweeks.models import Attachment, Event, EventCategory, UserProfile
from lifeweeks.models.event import EventCreate, EventUpdate
from lifeweeks.services import importer
from lifeweeks.services.attachments import attachment_url, delete_attachment, upload_attachment
from lifeweeks.services.events import (
    anniversaries_on,
    create_event,
    delete_event,
    get_event,
    list_events,
    recompute_week_numbers,
    update_event,
)
from lifeweeks.storage.blob import LocalBlobStore
from lifeweeks.timeline.catalog import find_entries
from lifeweeks.timeline.weeks import weeks_between


class FailingBlobStore(LocalBlobStore):
    """Blob store whose writes fail, and whose deletes fail for chosen names."""

    def __init__(self, root, fail_names=()):
        """Fail deletes of blobs whose file name is in ``fail_names``."""
        super().__init__(root, secret="test-secret")
        self.fail_names = set(fail_names)

    async def upload(self, data, owner_id, event_id, file_name):
        raise StorageError("bucket unavailable")

    async def delete(self, storage_path):
        if storage_path.rsplit("/", 1)[-1] in self.fail_names:
            raise StorageError(f"cannot remove {storage_path}")
        await super().delete(storage_path)


def attachment_rows(session: Session, event_id) -> list[Attachment]:
    """Attachment rows stored for ``event_id``."""
    return list(session.exec(select(Attachment).where(Attachment.event_id == event_id)).all())


class TestEventService:
    """Tests for event create/update/delete."""

    def test_create_event_sets_week_number(self, session: Session, profile: UserProfile):
        """Test a new event gets its week number from the birthdate."""
        data = EventCreate(title="First day at work", date=date(2012, 9, 3), category=EventCategory.CAREER)
        event = create_event(session, profile, data)

        assert event.id is not None
        assert event.week_number == weeks_between(profile.birthdate, date(2012, 9, 3))
        assert event.color == EventCategory.OTHER.color

    def test_update_date_moves_week(self, session: Session, profile: UserProfile, sample_event: Event):
        """Test a new date moves the event to another week."""
        updated = update_event(session, profile, sample_event, EventUpdate(date=date(2009, 6, 1)))
        assert updated.week_number == weeks_between(profile.birthdate, date(2009, 6, 1))

    def test_update_without_date_keeps_week(self, session: Session, profile: UserProfile, sample_event: Event):
        """Test other updates keep the week number."""
        week = sample_event.week_number
        updated = update_event(session, profile, sample_event, EventUpdate(title="Graduated"))

        assert updated.title == "Graduated"
        assert updated.week_number == week

    def test_recompute_after_birthdate_change(self, session: Session, profile: UserProfile, sample_event: Event):
        """Test week numbers follow a birthdate change."""
        profile.birthdate = date(1991, 1, 1)
        changed = recompute_week_numbers(session, profile)
        session.commit()

        assert changed == 1
        assert sample_event.week_number == weeks_between(date(1991, 1, 1), sample_event.date)

    def test_list_events_is_per_user(self, session: Session, profile: UserProfile, sample_event: Event):
        """Test users only see their own events."""
        other = UserProfile(full_name="Other", email="o@example.com", birthdate=date(1980, 1, 1))
        session.add(other)
        session.commit()
        create_event(session, other, EventCreate(title="Not mine", date=date(2000, 1, 1)))

        assert [e.title for e in list_events(session, profile.id)] == ["Graduated College"]

    def test_get_event_of_another_user(self, session: Session, sample_event: Event):
        """Test another user's event is not found."""
        other = UserProfile(full_name="Other", email="o@example.com", birthdate=date(1980, 1, 1))
        session.add(other)
        session.commit()

        with pytest.raises(NotFoundError):
            get_event(session, other.id, sample_event.id)

    def test_invalid_color(self):
        """Test a malformed color is rejected."""
        with pytest.raises(ValueError):
            EventCreate(title="Bad", date=date(2000, 1, 1), color="blue")

    @pytest.mark.parametrize("field", ["title", "date", "category", "color", "notify_on_anniversary"])
    def test_update_rejects_null(self, field):
        """Test required fields may be omitted from an update but not nulled."""
        with pytest.raises(ValueError):
            EventUpdate(**{field: None})

    def test_update_allows_null_description(self):
        """Test the description can be cleared."""
        assert EventUpdate(description=None).model_dump(exclude_unset=True) == {"description": None}


class TestDeleteEvent:
    """Deleting an event removes its attachments first."""

    def test_cascade(self, session: Session, store: LocalBlobStore, event_with_attachments: Event):
        """Test deleting an event removes its files and attachment rows."""
        event_id = event_with_attachments.id
        paths = [a.storage_path for a in event_with_attachments.attachments]

        stats = asyncio.run(delete_event(session, store, event_with_attachments))

        assert stats == {"attachments_deleted": 2, "attachments_failed": 0}
        assert session.get(Event, event_id) is None
        assert attachment_rows(session, event_id) == []
        assert not any(store.resolve(path).exists() for path in paths)

    def test_failed_blob_keeps_event_and_row(self, session: Session, tmp_path, event_with_attachments: Event):
        """Test a failed file removal keeps the event and that attachment."""
        store = FailingBlobStore(tmp_path / "blobs", fail_names={"photo.png"})
        event_id = event_with_attachments.id

        with pytest.raises(EventDeleteError) as exc_info:
            asyncio.run(delete_event(session, store, event_with_attachments))

        remaining = attachment_rows(session, event_id)
        assert session.get(Event, event_id) is not None
        assert [a.file_name for a in remaining] == ["photo.png"]
        assert exc_info.value.failed_attachment_ids == [remaining[0].id]
        assert not store.resolve(f"{event_with_attachments.user_id}/{event_id}/diploma.pdf").exists()

    def test_event_without_attachments(self, session: Session, store: LocalBlobStore, sample_event: Event):
        """Test deleting an event without attachments."""
        stats = asyncio.run(delete_event(session, store, sample_event))
        assert stats["attachments_deleted"] == 0
        assert session.get(Event, sample_event.id) is None


class TestAttachmentService:
    """Upload writes the blob before the row; delete removes it before the row."""

    def test_upload(self, session: Session, store: LocalBlobStore, sample_event: Event):
        """Test uploading stores the file and records it."""
        attachment = asyncio.run(upload_attachment(
            session, store, sample_event, b"%PDF-1.4", "transcript.pdf", "application/pdf", "Final grades"
        ))

        assert attachment.file_size == 8
        assert attachment.description == "Final grades"
        assert store.resolve(attachment.storage_path).read_bytes() == b"%PDF-1.4"
        assert attachment_rows(session, sample_event.id) == [attachment]

    def test_invalid_type_writes_nothing(self, session: Session, store: LocalBlobStore, sample_event: Event):
        """Test a rejected file touches neither the store nor the database."""
        with pytest.raises(FileValidationError):
            asyncio.run(upload_attachment(
                session, store, sample_event, b"MZ", "setup.exe", "application/x-msdownload"
            ))

        assert attachment_rows(session, sample_event.id) == []
        assert not store.root.exists()

    def test_storage_failure_inserts_no_row(self, session: Session, tmp_path, sample_event: Event):
        """Test a failed write records nothing."""
        store = FailingBlobStore(tmp_path / "blobs")

        with pytest.raises(AttachmentError) as exc_info:
            asyncio.run(upload_attachment(session, store, sample_event, b"x", "a.png", "image/png"))

        assert exc_info.value.action == "upload"
        assert attachment_rows(session, sample_event.id) == []

    def test_delete(self, session: Session, store: LocalBlobStore, event_with_attachments: Event):
        """Test deleting removes the file and the row."""
        attachment = event_with_attachments.attachments[0]
        path = attachment.storage_path

        asyncio.run(delete_attachment(session, store, attachment))

        assert len(attachment_rows(session, event_with_attachments.id)) == 1
        assert not store.resolve(path).exists()

    def test_delete_failure_keeps_row(self, session: Session, tmp_path, event_with_attachments: Event):
        """Test a failed file removal keeps the row."""
        store = FailingBlobStore(tmp_path / "blobs", fail_names={"diploma.pdf"})
        attachment = next(a for a in event_with_attachments.attachments if a.file_name == "diploma.pdf")

        with pytest.raises(AttachmentError) as exc_info:
            asyncio.run(delete_attachment(session, store, attachment))

        assert exc_info.value.action == "delete"
        assert session.get(Attachment, attachment.id) is not None

    def test_signed_url(self, session: Session, store: LocalBlobStore, event_with_attachments: Event):
        """Test a signed download URL is minted."""
        attachment = event_with_attachments.attachments[0]
        url = asyncio.run(attachment_url(store, attachment, ttl_seconds=30))

        assert url.startswith(f"/files/{attachment.storage_path}?expires=")


class TestImporter:
    """Catalog entries become events one at a time."""

    def test_imports_entries(self, session: Session, profile: UserProfile):
        """Test catalog entries become events with mapped categories."""
        entries = find_entries(["iphone-2007", "life-stage-18"], profile.birthdate, date(2024, 1, 1))
        stats = importer.import_catalog_entries(session, profile, entries)

        assert stats["requested"] == 2
        assert stats["created"] == 2
        assert stats["failed"] == 0
        events = {e.title: e for e in list_events(session, profile.id)}
        assert events["iPhone Released"].category == EventCategory.OTHER
        assert events["Became an Adult"].category == EventCategory.PERSONAL
        assert events["Became an Adult"].date == date(2008, 1, 1)

    def test_partial_failure(self, session: Session, profile: UserProfile, monkeypatch):
        """Test one failed entry does not stop the others."""
        real_create = importer.create_event

        def flaky_create(session, profile, data):
            """Fail the insert for one title."""
            if data.title == "Google Founded":
                raise SQLAlchemyError("constraint failed")
            return real_create(session, profile, data)

        monkeypatch.setattr(importer, "create_event", flaky_create)
        entries = find_entries(["google-1998", "iphone-2007"], profile.birthdate, date(2024, 1, 1))

        stats = importer.import_catalog_entries(session, profile, entries)

        assert stats["created"] == 1
        assert stats["failed"] == 1
        assert [e.title for e in list_events(session, profile.id)] == ["iPhone Released"]


class TestAnniversaries:
    """Tests for the anniversary reminder query."""

    def test_flagged_events_on_same_day(self, session: Session, profile: UserProfile):
        """Test only flagged events on the same month and day are reported."""
        create_event(session, profile, EventCreate(
            title="Wedding", date=date(2015, 6, 20), notify_on_anniversary=True,
        ))
        create_event(session, profile, EventCreate(title="Unflagged", date=date(2016, 6, 20)))
        create_event(session, profile, EventCreate(
            title="Other day", date=date(2015, 6, 21), notify_on_anniversary=True,
        ))

        events = anniversaries_on(session, date(2024, 6, 20))
        assert [e.title for e in events] == ["Wedding"]

    def test_same_year_is_not_an_anniversary(self, session: Session, profile: UserProfile):
        """Test an event dated today is not its own anniversary."""
        create_event(session, profile, EventCreate(
            title="Today", date=date(2024, 6, 20), notify_on_anniversary=True,
        ))
        assert anniversaries_on(session, date(2024, 6, 20)) == []

    def test_check_anniversaries(self, session: Session, profile: UserProfile):
        """Test the reminder payload."""
        event = create_event(session, profile, EventCreate(
            title="Wedding", date=date(2015, 6, 20), notify_on_anniversary=True,
        ))

        reminders = check_anniversaries(session, date(2024, 6, 20), profile.id)

        assert reminders == [{
            "event_id": str(event.id),
            "user_id": str(profile.id),
            "title": "Wedding",
            "date": "2015-06-20",
            "years": 9,
        }]

    def test_leap_day_reported_on_feb_28(self, session: Session, profile: UserProfile):
        """Test a Feb 29 event is reported on Feb 28 in non-leap years."""
        create_event(session, profile, EventCreate(
            title="Leap wedding", date=date(2016, 2, 29), notify_on_anniversary=True,
        ))

        assert [e.title for e in anniversaries_on(session, date(2023, 2, 28))] == ["Leap wedding"]
        assert anniversaries_on(session, date(2023, 3, 1)) == []

    def test_leap_day_in_leap_year(self, session: Session, profile: UserProfile):
        """Test in leap years a Feb 29 event is reported on Feb 29 only."""
        create_event(session, profile, EventCreate(
            title="Leap wedding", date=date(2016, 2, 29), notify_on_anniversary=True,
        ))

        assert anniversaries_on(session, date(2024, 2, 28)) == []
        assert [e.title for e in anniversaries_on(session, date(2024, 2, 29))] == ["Leap wedding"]
