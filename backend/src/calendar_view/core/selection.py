"""
Calendar selection from request signals.

The request may carry several overlapping hints about which calendar to show.
They are scanned in a fixed priority order and the first non-empty one becomes
the signal; each signal kind has its own resolver:

    phpcid  -> the calendar id itself
    eid     -> the calendar owning that event
    oid     -> the calendar owning that occurrence's event
    (none)  -> the user's default, the site default, or the first calendar
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..database.pydantic_schemas import UserSchema
from ..database.typed_operations import CalendarStore, fits_row_id
from .dates import parse_int
from .errors import InvalidCalendarError, InvalidParameterError, NoCalendarsError

logger = logging.getLogger(__name__)


class CalendarSignal(str, Enum):
    EXPLICIT_ID = "phpcid"
    EVENT_ID = "eid"
    OCCURRENCE_ID = "oid"
    DEFAULT = "default"


# Scan order; the first non-empty parameter wins
SIGNAL_PRIORITY = (
    CalendarSignal.EXPLICIT_ID,
    CalendarSignal.EVENT_ID,
    CalendarSignal.OCCURRENCE_ID,
)


def first_value(value: Any) -> Any:
    """Scalar view of a parameter that may have been repeated."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def is_blank(value: Any) -> bool:
    """
    Whether a request value counts as not supplied.

    None, empty or whitespace-only strings, "0", the integer 0 and empty
    lists are all blank. A list is judged by its first element.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() in ("", "0")
    if isinstance(value, int):
        return value == 0
    if isinstance(value, (list, tuple)):
        return not value or is_blank(value[0])
    return False


@dataclass(frozen=True)
class CalendarSelector:
    signal: CalendarSignal
    raw: Any = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "CalendarSelector":
        for signal in SIGNAL_PRIORITY:
            value = params.get(signal.value)
            if not is_blank(value):
                return cls(signal, first_value(value))
        return cls(CalendarSignal.DEFAULT)

    def resolve(
        self,
        store: CalendarStore,
        user: UserSchema,
        default_calendar_key: str = "default_cid",
    ) -> int:
        """Return the selected calendar id; existence is checked by the caller."""
        resolver = _RESOLVERS[self.signal]
        cid = resolver(self, store, user, default_calendar_key)
        logger.debug("Calendar %s selected by %s=%r", cid, self.signal.value, self.raw)
        return cid


def _resolve_explicit(
    selector: CalendarSelector, store: CalendarStore, user: UserSchema, key: str
) -> int:
    cid = parse_int(selector.raw)
    if cid is None:
        raise InvalidParameterError("calendar id", selector.raw)
    if not fits_row_id(cid):
        raise InvalidCalendarError(selector.raw)
    return cid


def _resolve_event(
    selector: CalendarSelector, store: CalendarStore, user: UserSchema, key: str
) -> int:
    eid = parse_int(selector.raw)
    event = store.load_event_by_event_id(eid) if eid is not None else None
    if event is None:
        raise InvalidParameterError("event id", selector.raw)
    return event.calendar_id


def _resolve_occurrence(
    selector: CalendarSelector, store: CalendarStore, user: UserSchema, key: str
) -> int:
    oid = parse_int(selector.raw)
    event = store.load_event_by_occurrence_id(oid) if oid is not None else None
    if event is None:
        raise InvalidParameterError("occurrence id", selector.raw)
    return event.calendar_id


def _resolve_default(
    selector: CalendarSelector, store: CalendarStore, user: UserSchema, key: str
) -> int:
    calendars = store.list_calendars()
    if not calendars:
        raise NoCalendarsError()

    candidate: Optional[int] = user.default_calendar_id
    if candidate is None:
        candidate = parse_int(store.get_site_config(key))

    if candidate is not None and candidate in calendars:
        return candidate

    # Never leave the viewer without a calendar
    fallback = next(iter(calendars))
    logger.info(
        "Default calendar %r not available, falling back to calendar %s",
        candidate,
        fallback,
    )
    return fallback


_RESOLVERS: dict[
    CalendarSignal, Callable[[CalendarSelector, CalendarStore, UserSchema, str], int]
] = {
    CalendarSignal.EXPLICIT_ID: _resolve_explicit,
    CalendarSignal.EVENT_ID: _resolve_event,
    CalendarSignal.OCCURRENCE_ID: _resolve_occurrence,
    CalendarSignal.DEFAULT: _resolve_default,
}
