from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int | None = None
    username: str | None = None
    timezone: str | None = None
    language: str | None = None
    default_calendar_id: int | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    @classmethod
    def anonymous(cls) -> "UserSchema":
        """Visitor without a session: no preferences and no default calendar."""
        return cls()


class CalendarSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    title: str
    timezone: str | None = None
    language: str | None = None


class EventSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    calendar_id: int
    subject: str
    description: str | None = None


class OccurrenceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    event_id: int
    start_ts: datetime
    end_ts: datetime | None = None
