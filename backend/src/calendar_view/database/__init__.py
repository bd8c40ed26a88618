# Storage collaborator for calendar view context resolution
from .base import Base
from .schema import User, Calendar, Event, Occurrence, SiteConfig
from .pydantic_schemas import (
    UserSchema,
    CalendarSchema,
    EventSchema,
    OccurrenceSchema,
)
from .typed_operations import CalendarStore, fits_row_id
from .db import build_engine, build_sessionmaker, session_scope

__all__ = [
    "Base",
    # ORM models
    "User",
    "Calendar",
    "Event",
    "Occurrence",
    "SiteConfig",
    # Schemas
    "UserSchema",
    "CalendarSchema",
    "EventSchema",
    "OccurrenceSchema",
    # Store
    "CalendarStore",
    "fits_row_id",
    # Session handling
    "build_engine",
    "build_sessionmaker",
    "session_scope",
]
