"""
Calendar view - Endpoint Handlers

Resolves the request context for the incoming request and returns it as JSON.
Uses Starlette for HTTP handling with SQLAlchemy for database operations.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Awaitable, Optional
from functools import wraps

logger = logging.getLogger(__name__)

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette import status

from sqlalchemy.orm import Session

from ..config import Settings
from ..database import CalendarStore
from ..core import (
    ContextError,
    ContextResolver,
    InternalError,
    RequestContext,
    TransportMetadata,
    handle_exception,
    serialize_context,
)
from ..core.dates import parse_int


# ============================================================================
# REQUEST UTILITIES
# ============================================================================


def _get_session(request: Request) -> Session:
    """
    Get the database session from request state.

    The DatabaseSessionMiddleware sets request.state.db_session for the
    lifetime of the request.
    """
    session = getattr(request.state, "db_session", None)
    if session is None:
        raise InternalError("Missing database session")
    return session


def get_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or Settings()


def get_session_user_id(request: Request) -> Optional[int]:
    """User id carried by the signed session cookie, if any."""
    if "session" not in request.scope:
        return None
    return parse_int(request.session.get("uid"))


def request_params(request: Request) -> dict[str, Any]:
    """
    Query parameters as a dict.

    Repeated keys become lists and "name[]" keys are folded into "name".
    """
    params: dict[str, Any] = {}
    for key, value in request.query_params.multi_items():
        if key.endswith("[]"):
            key = key[:-2]
        if key in params:
            existing = params[key]
            if not isinstance(existing, list):
                existing = [existing]
            existing.append(value)
            params[key] = existing
        else:
            params[key] = value
    return params


def resolve_context(request: Request) -> RequestContext:
    """Resolve and cache the context on request.state."""
    context = getattr(request.state, "context", None)
    if context is None:
        resolver = ContextResolver(
            CalendarStore(_get_session(request)),
            get_settings(request),
        )
        context = resolver.resolve(
            request_params(request),
            session_user_id=get_session_user_id(request),
            metadata=TransportMetadata.from_request(request),
        )
        request.state.context = context
    return context


# ============================================================================
# ERROR HANDLING WRAPPER
# ============================================================================


def api_handler(
    handler: Callable[[Request], Awaitable[JSONResponse]]
) -> Callable[[Request], Awaitable[JSONResponse]]:
    """
    Decorator that wraps API handlers with:
    - Conversion of ContextError into JSON error responses
    - Logging and sanitising of unexpected exceptions
    """
    @wraps(handler)
    async def wrapper(request: Request) -> JSONResponse:
        try:
            return await handler(request)
        except ContextError as e:
            logger.info("Context resolution failed: %s", e.message)
            return handle_exception(e)
        except Exception as e:
            # Log full exception server-side, return sanitized error to client
            logger.exception("Unhandled exception in calendar view API: %s", e)
            return InternalError().to_response()

    return wrapper


# ============================================================================
# ENDPOINTS
# ============================================================================


@api_handler
async def context_get(request: Request) -> JSONResponse:
    """
    GET /context

    Returns the resolved request context.

    Parameters:
    - phpcid, eid, oid (query): calendar selection signals
    - year, month, day (query): displayed date
    - lang (query): language override
    - action (query): requested view, defaults to display_month
    """
    context = resolve_context(request)
    return JSONResponse(
        content=serialize_context(context),
        status_code=status.HTTP_200_OK,
    )


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


# ============================================================================
# ROUTE DEFINITIONS
# ============================================================================

routes = [
    Route("/context", context_get, methods=["GET"]),
    Route("/health", health, methods=["GET"]),
]
