"""Shared test fixtures."""

from datetime import date
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from lifeweeks.core.config import settings
from lifeweeks.core.database import get_session
from lifeweeks.main import app
from lifeweeks.models import Attachment, Event, EventCategory, UserProfile
from lifeweeks.storage.blob import LocalBlobStore, get_blob_store
from lifeweeks.timeline.weeks import weeks_between

BIRTHDATE = date(1990, 1, 1)


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="store")
def store_fixture(tmp_path) -> LocalBlobStore:
    """Blob store rooted in a temporary directory."""
    return LocalBlobStore(tmp_path / "blobs", secret="test-secret")


@pytest.fixture(name="profile")
def profile_fixture(session: Session) -> UserProfile:
    """Create the profile of the test user."""
    profile = UserProfile(
        id=uuid4(),
        full_name="Ada Lovelace",
        email="ada@example.com",
        birthdate=BIRTHDATE,
    )
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


@pytest.fixture(name="client")
def client_fixture(session: Session, store: LocalBlobStore, profile: UserProfile):
    """Create a test client authenticated as the test user."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_blob_store] = lambda: store
    client = TestClient(app, headers={settings.user_header: str(profile.id)})
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="anonymous_client")
def anonymous_client_fixture(session: Session):
    """Create a test client without an identity header."""
    app.dependency_overrides[get_session] = lambda: session
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="sample_event")
def sample_event_fixture(session: Session, profile: UserProfile) -> Event:
    """Create a sample event for testing."""
    event_date = date(2008, 6, 1)
    event = Event(
        user_id=profile.id,
        title="Graduated College",
        description="B.Sc. in Mathematics",
        date=event_date,
        week_number=weeks_between(profile.birthdate, event_date),
        category=EventCategory.EDUCATION,
        color="#10B981",
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="event_with_attachments")
def event_with_attachments_fixture(
    session: Session, sample_event: Event, store: LocalBlobStore
) -> Event:
    """Attach two stored files to the sample event."""
    for name in ("diploma.pdf", "photo.png"):
        path = f"{sample_event.user_id}/{sample_event.id}/{name}"
        target = store.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"content of " + name.encode())
        session.add(Attachment(
            event_id=sample_event.id,
            file_name=name,
            file_size=len(name) + 11,
            mime_type="application/pdf" if name.endswith(".pdf") else "image/png",
            storage_path=path,
        ))
    session.commit()
    session.refresh(sample_event)
    return sample_event


@pytest.fixture(name="make_event")
def make_event_fixture():
    """Factory for lightweight in-memory events used by the pure timeline tests."""

    def make_event(
        day: date,
        title: str = "Event",
        category: EventCategory = EventCategory.OTHER,
        attachments: int = 0,
        notify: bool = False,
    ):
        return SimpleNamespace(
            id=uuid4(),
            title=title,
            description=None,
            date=day,
            week_number=weeks_between(BIRTHDATE, day),
            category=category,
            color=category.color,
            notify_on_anniversary=notify,
            attachments=[object() for _ in range(attachments)],
            created_at=None,
        )

    return make_event
