# Context resolution errors
# Every error is terminal for the request; the caller renders the failure page

import logging
from typing import Any, Optional
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


# ============================================================================
# ERROR REASONS
# ============================================================================

ERROR_INVALID_PARAMETER = "invalidParameter"
ERROR_OUT_OF_RANGE = "outOfRange"
ERROR_CALENDAR_NOT_FOUND = "calendarNotFound"
ERROR_NO_CALENDARS = "noCalendars"
ERROR_INTERNAL = "internalError"

# Domain
ERROR_DOMAIN_GLOBAL = "global"
ERROR_DOMAIN_CALENDAR = "calendar"


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================


class ContextError(Exception):
    """Base exception for request context resolution."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        reason: str = ERROR_INVALID_PARAMETER,
        domain: str = ERROR_DOMAIN_CALENDAR,
        location: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.reason = reason
        self.domain = domain
        self.location = location

    def to_dict(self) -> dict[str, Any]:
        """Convert to an error response dict."""
        error_detail: dict[str, Any] = {
            "domain": self.domain,
            "reason": self.reason,
            "message": self.message,
        }
        if self.location:
            error_detail["location"] = self.location
            error_detail["locationType"] = "parameter"

        return {
            "error": {
                "code": self.status_code,
                "message": self.message,
                "errors": [error_detail],
            }
        }

    def to_response(self) -> JSONResponse:
        """Convert to Starlette JSONResponse."""
        return JSONResponse(
            content=self.to_dict(),
            status_code=self.status_code,
        )


class InvalidParameterError(ContextError):
    """A request value is malformed or names an entity that does not exist (400)."""

    def __init__(self, field: str, value: Any = None):
        message = f"Invalid {field}"
        if value is not None:
            message = f"{message}: {value}"
        super().__init__(
            message=message,
            status_code=400,
            reason=ERROR_INVALID_PARAMETER,
            location=field,
        )
        self.field = field
        self.value = value


class OutOfRangeError(ContextError):
    """A numeric request value is outside its accepted domain (400)."""

    def __init__(self, field: str, value: Any = None):
        message = f"{field.capitalize()} is out of range"
        if value is not None:
            message = f"{message}: {value}"
        super().__init__(
            message=message,
            status_code=400,
            reason=ERROR_OUT_OF_RANGE,
            location=field,
        )
        self.field = field
        self.value = value


class InvalidCalendarError(ContextError):
    """The selected calendar id is not stored (404)."""

    def __init__(self, calendar_id: Any):
        super().__init__(
            message=f"Bad calendar ID: {calendar_id}",
            status_code=404,
            reason=ERROR_CALENDAR_NOT_FOUND,
        )
        self.calendar_id = calendar_id


class NoCalendarsError(ContextError):
    """No calendars are configured at all (503)."""

    def __init__(self):
        super().__init__(
            message="There are no calendars.",
            status_code=503,
            reason=ERROR_NO_CALENDARS,
            domain=ERROR_DOMAIN_GLOBAL,
        )


class InternalError(ContextError):
    """Internal server error (500)."""

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(
            message=message,
            status_code=500,
            reason=ERROR_INTERNAL,
            domain=ERROR_DOMAIN_GLOBAL,
        )


# ============================================================================
# ERROR HANDLING UTILITIES
# ============================================================================


def handle_exception(exc: Exception) -> JSONResponse:
    """Convert an exception to a JSONResponse."""
    if isinstance(exc, ContextError):
        return exc.to_response()

    logger.error("Unexpected exception: %s", exc, exc_info=True)

    return InternalError().to_response()
