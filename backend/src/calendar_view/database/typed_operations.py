"""
Typed operations wrapper for the calendar view store.

This module provides a class-based API over the raw operations, encapsulating
session management. It is the storage collaborator consumed by context
resolution: user lookup by session id, calendar lookup and enumeration,
site configuration, and event/occurrence to calendar mapping.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from . import operations as ops
from .pydantic_schemas import (
    CalendarSchema,
    EventSchema,
    OccurrenceSchema,
    UserSchema,
)


# Widest integer key any supported backend can bind (SQLite INTEGER)
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


def fits_row_id(value: int) -> bool:
    """True if the value can be bound as an integer primary key."""
    return MIN_ROW_ID <= value <= MAX_ROW_ID


class CalendarStore:
    """
    Typed operations for the calendar view store.

    Example usage:
        store = CalendarStore(session)

        calendar = store.create_calendar("Team", timezone="Europe/Berlin")
        event = store.create_event(calendar.id, "Standup")

        store.load_event_by_event_id(event.id).calendar_id  # == calendar.id
    """

    def __init__(self, session: Session):
        """
        Initialize with a SQLAlchemy session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    # ========================================================================
    # USER OPERATIONS
    # ========================================================================

    def create_user(
        self,
        username: str,
        *,
        timezone: Optional[str] = None,
        language: Optional[str] = None,
        default_calendar_id: Optional[int] = None,
    ) -> UserSchema:
        result = ops.create_user(
            self.session,
            username=username,
            timezone=timezone,
            language=language,
            default_calendar_id=default_calendar_id,
        )
        return UserSchema.model_validate(result)

    def load_user_by_session_id(self, user_id: int) -> Optional[UserSchema]:
        """
        Get the user a session points at.

        Args:
            user_id: User ID carried by the session

        Returns:
            User model or None if the user no longer exists
        """
        if not fits_row_id(user_id):
            return None
        result = ops.get_user(self.session, user_id)
        return UserSchema.model_validate(result) if result else None

    # ========================================================================
    # CALENDAR OPERATIONS
    # ========================================================================

    def create_calendar(
        self,
        title: str,
        *,
        timezone: Optional[str] = None,
        language: Optional[str] = None,
        calendar_id: Optional[int] = None,
    ) -> CalendarSchema:
        result = ops.create_calendar(
            self.session,
            title=title,
            timezone=timezone,
            language=language,
            calendar_id=calendar_id,
        )
        return CalendarSchema.model_validate(result)

    def load_calendar(self, calendar_id: int) -> Optional[CalendarSchema]:
        if not fits_row_id(calendar_id):
            return None
        result = ops.get_calendar(self.session, calendar_id)
        return CalendarSchema.model_validate(result) if result else None

    def list_calendars(self) -> dict[int, CalendarSchema]:
        """
        All calendars keyed by ID.

        Returns:
            Dict in insertion order, so the first key is the oldest calendar
        """
        return {
            calendar.id: CalendarSchema.model_validate(calendar)
            for calendar in ops.list_calendars(self.session)
        }

    def get_site_config(self, key: str) -> Optional[str]:
        return ops.get_config(self.session, key)

    def set_site_config(self, key: str, value: Optional[str]) -> None:
        ops.set_config(self.session, key, value)

    # ========================================================================
    # EVENT OPERATIONS
    # ========================================================================

    def create_event(
        self,
        calendar_id: int,
        subject: str,
        *,
        description: Optional[str] = None,
        event_id: Optional[int] = None,
    ) -> EventSchema:
        result = ops.create_event(
            self.session,
            calendar_id=calendar_id,
            subject=subject,
            description=description,
            event_id=event_id,
        )
        return EventSchema.model_validate(result)

    def create_occurrence(
        self,
        event_id: int,
        start_ts: datetime,
        *,
        end_ts: Optional[datetime] = None,
        occurrence_id: Optional[int] = None,
    ) -> OccurrenceSchema:
        result = ops.create_occurrence(
            self.session,
            event_id=event_id,
            start_ts=start_ts,
            end_ts=end_ts,
            occurrence_id=occurrence_id,
        )
        return OccurrenceSchema.model_validate(result)

    def load_event_by_event_id(self, eid: int) -> Optional[EventSchema]:
        if not fits_row_id(eid):
            return None
        result = ops.get_event_by_eid(self.session, eid)
        return EventSchema.model_validate(result) if result else None

    def load_event_by_occurrence_id(self, oid: int) -> Optional[EventSchema]:
        """
        Get the event owning an occurrence.

        Args:
            oid: Occurrence ID

        Returns:
            Event model (exposing calendar_id) or None if no such occurrence
        """
        if not fits_row_id(oid):
            return None
        result = ops.get_event_by_oid(self.session, oid)
        return EventSchema.model_validate(result) if result else None
