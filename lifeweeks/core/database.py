"""Database configuration and session management for SQLite.

The engine enables two SQLite pragmas on every connection:

    - **WAL (Write-Ahead Logging)**: readers are not blocked while the
      anniversary job or an import batch writes.

    - **Foreign Keys**: off by default in SQLite. Enabled so that
      ``Attachment.event_id`` and ``Event.user_id`` always reference
      existing rows.

``check_same_thread=False`` is needed because FastAPI may hand a session
created in one thread to a handler running in another.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from lifeweeks.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    # Register table models on the metadata before create_all
    import lifeweeks.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
