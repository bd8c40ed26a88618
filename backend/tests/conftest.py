"""
Shared pytest fixtures for all tests.

Provides a throwaway SQLite database, a CalendarStore bound to it and a
fixed clock so "today" is deterministic.
"""

import os
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from calendar_view.config import Settings
from calendar_view.core import ContextResolver
from calendar_view.database import Base, CalendarStore

# 2024-03-15 12:00 UTC
FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sqlite_db():
    """Create a temporary SQLite database with all tables."""
    db_fd, db_path = tempfile.mkstemp(suffix=".db")

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    yield session, engine, db_path

    session.close()
    engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def store(sqlite_db):
    session, _, _ = sqlite_db
    return CalendarStore(session)


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", default_timezone="UTC")


@pytest.fixture
def resolver(store, settings):
    return ContextResolver(store, settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def seeded(store):
    """
    Two calendars, an event in each, and one occurrence.

    Calendar 1 (New York, en) holds event 56 with occurrence 9.
    Calendar 2 (Berlin, de) holds event 55.
    """
    main = store.create_calendar(
        "Main", timezone="America/New_York", language="en", calendar_id=1
    )
    berlin = store.create_calendar(
        "Berlin Office", timezone="Europe/Berlin", language="de", calendar_id=2
    )
    store.create_event(berlin.id, "Sprint planning", event_id=55)
    board = store.create_event(main.id, "Board meeting", event_id=56)
    store.create_occurrence(
        board.id, datetime(2024, 3, 4, 15, 0), occurrence_id=9
    )
    return {"main": main, "berlin": berlin}
