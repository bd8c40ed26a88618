"""
Request context resolution.

Turns the request parameters, the session identity and the transport facts
into one RequestContext: the viewer, the calendar being viewed, the timezone
and language to render with, and the year/month/day on display.

Resolution runs forward through fixed steps (transport, identity, calendar,
timezone, language, date). Any ContextError aborts it; nothing is retried.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from typing import Any, Callable, Mapping, Optional
from zoneinfo import ZoneInfo

from ..config import Settings
from ..database.pydantic_schemas import CalendarSchema, UserSchema
from ..database.typed_operations import CalendarStore
from . import dates
from .errors import InvalidCalendarError, InvalidParameterError, OutOfRangeError
from .selection import CalendarSelector, first_value, is_blank
from .transport import TransportFacts, TransportMetadata

logger = logging.getLogger(__name__)

_LANG_RE = re.compile(r"\w+", re.ASCII)

STALE_SESSION_MESSAGE = "Your session has expired. You are now browsing anonymously."


def utc_now() -> datetime:
    return datetime.now(dt_timezone.utc)


@dataclass(frozen=True)
class RequestContext:
    """Resolved view state for one request. Only the message log may change."""

    user: UserSchema
    calendar: CalendarSchema
    timezone: str
    language: str
    year: int
    month: int
    day: int
    transport: TransportFacts
    action: str = "display_month"
    _messages: list[str] = field(default_factory=list, repr=False, compare=False)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def add_message(self, message: str) -> None:
        self._messages.append(message)


class ContextResolver:
    """
    Resolve a RequestContext against a CalendarStore.

    Example usage:
        resolver = ContextResolver(CalendarStore(session), Settings())
        context = resolver.resolve({"phpcid": "2", "month": "5"}, session_user_id=None)
    """

    def __init__(
        self,
        store: CalendarStore,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self.clock = clock or utc_now

    def resolve(
        self,
        params: Mapping[str, Any],
        session_user_id: Optional[int] = None,
        metadata: Optional[TransportMetadata] = None,
    ) -> RequestContext:
        metadata = metadata or TransportMetadata()
        messages: list[str] = []

        transport = TransportFacts.from_metadata(metadata)
        user = self.resolve_user(session_user_id, messages)
        calendar = self.resolve_calendar(params, user)
        zone = self.resolve_timezone(user, calendar)
        language = self.resolve_language(params, user, calendar, metadata)
        year, month, day = self.resolve_date(params, zone)

        context = RequestContext(
            user=user,
            calendar=calendar,
            timezone=zone.key,
            language=language,
            year=year,
            month=month,
            day=day,
            transport=transport,
            action=first_value(params.get("action")) or self.settings.default_action,
            _messages=messages,
        )
        logger.debug(
            "Resolved context: calendar=%s user=%s tz=%s lang=%s date=%04d-%02d-%02d",
            calendar.id,
            user.id,
            context.timezone,
            language,
            year,
            month,
            day,
        )
        return context

    # ========================================================================
    # IDENTITY
    # ========================================================================

    def resolve_user(
        self, session_user_id: Optional[int], messages: Optional[list[str]] = None
    ) -> UserSchema:
        if session_user_id is None:
            return UserSchema.anonymous()

        user = self.store.load_user_by_session_id(session_user_id)
        if user is None:
            logger.warning(
                "Session refers to unknown user %s, continuing anonymously",
                session_user_id,
            )
            if messages is not None:
                messages.append(STALE_SESSION_MESSAGE)
            return UserSchema.anonymous()
        return user

    # ========================================================================
    # CALENDAR
    # ========================================================================

    def resolve_calendar(
        self, params: Mapping[str, Any], user: UserSchema
    ) -> CalendarSchema:
        selector = CalendarSelector.from_params(params)
        cid = selector.resolve(
            self.store, user, default_calendar_key=self.settings.default_calendar_key
        )
        calendar = self.store.load_calendar(cid)
        if calendar is None:
            raise InvalidCalendarError(cid)
        return calendar

    # ========================================================================
    # LOCALE
    # ========================================================================

    def resolve_timezone(self, user: UserSchema, calendar: CalendarSchema) -> ZoneInfo:
        name = user.timezone or calendar.timezone
        return dates.load_zone(name, self.settings.default_timezone)

    def resolve_language(
        self,
        params: Mapping[str, Any],
        user: UserSchema,
        calendar: CalendarSchema,
        metadata: TransportMetadata,
    ) -> str:
        fallback = self.settings.default_language
        candidates = (
            first_value(params.get("lang")),
            user.language,
            calendar.language,
            (metadata.accept_language or "")[:2],
        )
        lang = next((str(c) for c in candidates if not is_blank(c)), fallback)
        if not _LANG_RE.fullmatch(lang):
            return fallback
        return lang

    # ========================================================================
    # DATE
    # ========================================================================

    def resolve_date(
        self, params: Mapping[str, Any], zone: ZoneInfo
    ) -> tuple[int, int, int]:
        today = dates.today_in(zone, self.clock())

        raw_month = first_value(params.get("month"))
        month = dates.parse_int(raw_month)
        if month is None:
            month = today.month
        elif not 1 <= month <= 12:
            raise OutOfRangeError("month", raw_month)

        raw_year = first_value(params.get("year"))
        year = dates.parse_int(raw_year)
        if year is None:
            year = today.year
        else:
            ts = dates.first_of_month_timestamp(year, month, zone)
            if ts is None or ts <= 0:
                raise InvalidParameterError("year", raw_year)

        day = dates.parse_int(first_value(params.get("day")))
        if day is not None:
            day = dates.wrap_day(day, year, month)
        elif (year, month) == (today.year, today.month):
            day = today.day
        else:
            day = 1

        return year, month, day
