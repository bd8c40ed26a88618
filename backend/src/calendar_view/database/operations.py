# Database operations for the calendar view storage collaborator
# Lookups used by context resolution plus the inserts used for seeding

import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)
from sqlalchemy.orm import Session
from sqlalchemy import select

from .schema import (
    User,
    Calendar,
    Event,
    Occurrence,
    SiteConfig,
)


# ============================================================================
# USER OPERATIONS
# ============================================================================


def create_user(
    session: Session,
    username: str,
    timezone: Optional[str] = None,
    language: Optional[str] = None,
    default_calendar_id: Optional[int] = None,
) -> User:
    """Create a new user."""
    user = User(
        username=username,
        timezone=timezone,
        language=language,
        default_calendar_id=default_calendar_id,
    )
    session.add(user)
    session.flush()
    return user


def get_user(session: Session, user_id: int) -> Optional[User]:
    """Get a user by ID."""
    return session.get(User, user_id)


# ============================================================================
# CALENDAR OPERATIONS
# ============================================================================


def create_calendar(
    session: Session,
    title: str,
    timezone: Optional[str] = None,
    language: Optional[str] = None,
    calendar_id: Optional[int] = None,
) -> Calendar:
    """Create a new calendar."""
    calendar = Calendar(
        id=calendar_id,
        title=title,
        timezone=timezone,
        language=language,
    )
    session.add(calendar)
    session.flush()
    return calendar


def get_calendar(session: Session, calendar_id: int) -> Optional[Calendar]:
    """Get a calendar by ID."""
    return session.get(Calendar, calendar_id)


def list_calendars(session: Session) -> list[Calendar]:
    """List all calendars in insertion order."""
    return list(
        session.execute(select(Calendar).order_by(Calendar.id)).scalars().all()
    )


# ============================================================================
# EVENT OPERATIONS
# ============================================================================


def create_event(
    session: Session,
    calendar_id: int,
    subject: str,
    description: Optional[str] = None,
    event_id: Optional[int] = None,
) -> Event:
    """Create an event in a calendar."""
    event = Event(
        id=event_id,
        calendar_id=calendar_id,
        subject=subject,
        description=description,
    )
    session.add(event)
    session.flush()
    return event


def create_occurrence(
    session: Session,
    event_id: int,
    start_ts: datetime,
    end_ts: Optional[datetime] = None,
    occurrence_id: Optional[int] = None,
) -> Occurrence:
    """Schedule one occurrence of an event."""
    occurrence = Occurrence(
        id=occurrence_id,
        event_id=event_id,
        start_ts=start_ts,
        end_ts=end_ts,
    )
    session.add(occurrence)
    session.flush()
    return occurrence


def get_event_by_eid(session: Session, eid: int) -> Optional[Event]:
    """Get an event by its event ID."""
    return session.get(Event, eid)


def get_event_by_oid(session: Session, oid: int) -> Optional[Event]:
    """Get the event that owns the given occurrence."""
    return session.execute(
        select(Event)
        .join(Occurrence, Occurrence.event_id == Event.id)
        .where(Occurrence.id == oid)
    ).scalar_one_or_none()


# ============================================================================
# SITE CONFIG OPERATIONS
# ============================================================================


def get_config(
    session: Session, key: str, default: Optional[str] = None
) -> Optional[str]:
    """Get a site-wide configuration value."""
    entry = session.get(SiteConfig, key)
    if entry is None:
        return default
    return entry.value


def set_config(session: Session, key: str, value: Optional[str]) -> SiteConfig:
    """Create or replace a site-wide configuration value."""
    entry = session.get(SiteConfig, key)
    if entry is None:
        entry = SiteConfig(key=key, value=value)
        session.add(entry)
    else:
        entry.value = value
    session.flush()
    logger.debug("Site config %s set to %r", key, value)
    return entry
