# HTTP surface for calendar view context resolution
from .methods import (
    routes,
    # Request utilities
    get_session_user_id,
    get_settings,
    request_params,
    resolve_context,
    # Handler wrapper
    api_handler,
    # Handlers
    context_get,
    health,
)
from .main import create_app

__all__ = [
    "routes",
    "get_session_user_id",
    "get_settings",
    "request_params",
    "resolve_context",
    "api_handler",
    "context_get",
    "health",
    "create_app",
]
