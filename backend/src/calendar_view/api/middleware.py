from __future__ import annotations

import logging

from sqlalchemy.orm import sessionmaker
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response, JSONResponse
from starlette import status

from ..database.db import session_scope

logger = logging.getLogger(__name__)


class DatabaseSessionMiddleware(BaseHTTPMiddleware):
    """Open one SQLAlchemy session per request on request.state.db_session."""

    def __init__(self, app, *, session_factory: sessionmaker):
        super().__init__(app)
        self.session_factory = session_factory

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.scope.get("path", "")
        if path == "/health":
            return await call_next(request)

        try:
            with session_scope(self.session_factory) as session:
                request.state.db_session = session
                return await call_next(request)
        except Exception:
            logger.exception("Unhandled exception in DatabaseSessionMiddleware")
            return JSONResponse(
                {"error": {"code": 500, "message": "internal server error"}},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
