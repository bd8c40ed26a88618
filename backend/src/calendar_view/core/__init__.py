# Core context resolution for the calendar view
from .errors import (
    ContextError,
    InvalidParameterError,
    OutOfRangeError,
    InvalidCalendarError,
    NoCalendarsError,
    InternalError,
    handle_exception,
)
from .transport import TransportMetadata, TransportFacts
from .selection import CalendarSignal, CalendarSelector
from .context import RequestContext, ContextResolver
from .serializers import serialize_context

__all__ = [
    # Errors
    "ContextError",
    "InvalidParameterError",
    "OutOfRangeError",
    "InvalidCalendarError",
    "NoCalendarsError",
    "InternalError",
    "handle_exception",
    # Transport
    "TransportMetadata",
    "TransportFacts",
    # Selection
    "CalendarSignal",
    "CalendarSelector",
    # Context
    "RequestContext",
    "ContextResolver",
    "serialize_context",
]
