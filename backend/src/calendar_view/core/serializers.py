# JSON shapes for the resolved request context

from typing import Any

from .context import RequestContext
from .transport import TransportFacts


def serialize_transport(transport: TransportFacts) -> dict[str, Any]:
    return {
        "script": transport.script,
        "urlPath": transport.url_path,
        "host": transport.host,
        "port": transport.port,
        "server": transport.server,
        "scheme": transport.scheme,
    }


def serialize_context(context: RequestContext) -> dict[str, Any]:
    """Serialize a RequestContext to the context endpoint's response body."""
    user = context.user
    return {
        "kind": "calendar#requestContext",
        "action": context.action,
        "calendar": context.calendar.model_dump(mode="json"),
        "user": {
            "id": user.id,
            "username": user.username,
            "anonymous": user.is_anonymous,
            "defaultCalendarId": user.default_calendar_id,
        },
        "timeZone": context.timezone,
        "language": context.language,
        "year": context.year,
        "month": context.month,
        "day": context.day,
        "transport": serialize_transport(context.transport),
        "messages": list(context.messages),
    }
