# Schema for the calendar view storage collaborator
# Users, calendars, events, occurrences and site-wide configuration

from datetime import datetime
from typing import Optional
from sqlalchemy import (
    String,
    Text,
    Integer,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base


# ============================================================================
# MODELS
# ============================================================================


class User(Base):
    """
    Registered user.
    Preferences are optional; an unset value defers to the calendar or site default.
    """

    __tablename__ = "calendar_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    timezone: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    language: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    default_calendar_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("calendars.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    default_calendar: Mapped[Optional["Calendar"]] = relationship()


class Calendar(Base):
    """
    Calendar resource.
    Carries the timezone and language used when the viewer has no preference.
    """

    __tablename__ = "calendars"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    timezone: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    language: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    events: Mapped[list["Event"]] = relationship(
        back_populates="calendar", cascade="all,delete-orphan"
    )


class Event(Base):
    """Event belonging to exactly one calendar."""

    __tablename__ = "events"
    __table_args__ = (Index("ix_events_calendar", "calendar_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    calendar_id: Mapped[int] = mapped_column(
        ForeignKey("calendars.id", ondelete="CASCADE"), nullable=False
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    calendar: Mapped["Calendar"] = relationship(back_populates="events")
    occurrences: Mapped[list["Occurrence"]] = relationship(
        back_populates="event", cascade="all,delete-orphan"
    )


class Occurrence(Base):
    """One concrete scheduled instance of an event."""

    __tablename__ = "occurrences"
    __table_args__ = (Index("ix_occurrences_event", "event_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    start_ts: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_ts: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    event: Mapped["Event"] = relationship(back_populates="occurrences")


class SiteConfig(Base):
    """Site-wide key/value configuration (e.g. default_cid)."""

    __tablename__ = "site_config"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
