#!/usr/bin/env python3
"""
Seed script for the calendar view database.

Creates the tables and loads a JSON seed file (calendars, users, events,
occurrences, site config) through CalendarStore.

Usage:
    DATABASE_URL=sqlite:///calendar_view.db python backend/utils/seed_calendars.py [seed.json]
"""

import json
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from calendar_view.config import Settings
from calendar_view.database import (
    Base,
    CalendarStore,
    build_engine,
    build_sessionmaker,
    session_scope,
)

DEFAULT_SEED = (
    Path(__file__).parent.parent.parent / "examples" / "calendar_view" / "seeds" / "default.json"
)


def load_seed(store: CalendarStore, seed_data: dict):
    """Insert seed records in foreign key dependency order."""
    for record in seed_data.get("calendars", []):
        store.create_calendar(
            record["title"],
            timezone=record.get("timezone"),
            language=record.get("language"),
            calendar_id=record.get("id"),
        )
    print(f"  Inserted {len(seed_data.get('calendars', []))} calendars")

    for record in seed_data.get("users", []):
        store.create_user(
            record["username"],
            timezone=record.get("timezone"),
            language=record.get("language"),
            default_calendar_id=record.get("default_calendar_id"),
        )
    print(f"  Inserted {len(seed_data.get('users', []))} users")

    for record in seed_data.get("events", []):
        store.create_event(
            record["calendar_id"],
            record["subject"],
            description=record.get("description"),
            event_id=record.get("id"),
        )

    for record in seed_data.get("occurrences", []):
        end_ts = record.get("end_ts")
        store.create_occurrence(
            record["event_id"],
            datetime.fromisoformat(record["start_ts"]),
            end_ts=datetime.fromisoformat(end_ts) if end_ts else None,
            occurrence_id=record.get("id"),
        )

    for key, value in seed_data.get("site_config", {}).items():
        store.set_site_config(key, value)


def main():
    seed_file = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED
    if not seed_file.exists():
        print(f"ERROR: seed file not found: {seed_file}")
        sys.exit(1)

    settings = Settings.from_environ()
    engine = build_engine(settings)
    Base.metadata.create_all(engine)
    print(f"Created {len(Base.metadata.tables)} tables")

    with open(seed_file) as f:
        seed_data = json.load(f)

    with session_scope(build_sessionmaker(engine)) as session:
        load_seed(CalendarStore(session), seed_data)
    print(f"Loaded seed data from {seed_file.name}")


if __name__ == "__main__":
    main()
