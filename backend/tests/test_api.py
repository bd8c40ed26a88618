"""
HTTP tests for the context endpoint using Starlette's TestClient.
"""

import json
from base64 import b64encode

import pytest
from itsdangerous import TimestampSigner
from starlette.testclient import TestClient

from calendar_view.api import create_app
from calendar_view.config import Settings
from calendar_view.database import CalendarStore, session_scope


SECRET = "test-secret"


def session_cookie(data: dict) -> str:
    """Build a cookie value the way Starlette's SessionMiddleware signs it."""
    payload = b64encode(json.dumps(data).encode("utf-8"))
    return TimestampSigner(SECRET).sign(payload).decode("utf-8")


@pytest.fixture
def app(tmp_path):
    settings = Settings(
        database_url=f"sqlite:///{tmp_path / 'api.db'}",
        session_secret_key=SECRET,
    )
    return create_app(settings, create_tables=True)


@pytest.fixture
def seed(app):
    def _seed(fn):
        with session_scope(app.state.session_factory) as session:
            return fn(CalendarStore(session))

    return _seed


@pytest.fixture
def populated(seed):
    def _populate(store):
        store.create_calendar("Main", timezone="America/New_York", calendar_id=1)
        store.create_calendar("Berlin", timezone="Europe/Berlin", language="de", calendar_id=2)
        store.create_event(2, "Sprint planning", event_id=55)
        store.create_event(1, "Board meeting", event_id=56)
        user = store.create_user("alice", language="fr", default_calendar_id=2)
        return user.id

    return seed(_populate)


def test_health(app):
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_context_for_anonymous_request(app, populated):
    client = TestClient(app)
    response = client.get("/context", params={"year": "2023", "month": "2", "day": "30"})

    assert response.status_code == 200
    body = response.json()
    assert body["calendar"]["id"] == 1
    assert body["user"]["anonymous"] is True
    assert body["timeZone"] == "America/New_York"
    assert body["language"] == "en"
    assert (body["year"], body["month"], body["day"]) == (2023, 2, 2)
    assert body["action"] == "display_month"
    assert body["transport"]["scheme"] == "http"
    assert body["transport"]["script"] == "/context"


def test_repeated_eid_uses_first_value(app, populated):
    client = TestClient(app)
    response = client.get("/context?eid=55&eid=56&oid=9")
    assert response.status_code == 200
    assert response.json()["calendar"]["id"] == 2


def test_bracketed_eid_is_accepted(app, populated):
    client = TestClient(app)
    response = client.get("/context?eid[]=56&eid[]=55")
    assert response.status_code == 200
    assert response.json()["calendar"]["id"] == 1


def test_forwarded_proto_switches_scheme(app, populated):
    client = TestClient(app)
    response = client.get("/context", headers={"X-Forwarded-Proto": "https"})
    assert response.json()["transport"]["scheme"] == "https"


def test_session_user_preferences_apply(app, populated):
    client = TestClient(app, cookies={"phpc_session": session_cookie({"uid": populated})})
    body = client.get("/context").json()

    assert body["user"]["id"] == populated
    assert body["user"]["anonymous"] is False
    assert body["calendar"]["id"] == 2
    assert body["language"] == "fr"


def test_stale_session_reports_message(app, populated):
    client = TestClient(app, cookies={"phpc_session": session_cookie({"uid": 999})})
    body = client.get("/context").json()

    assert body["user"]["anonymous"] is True
    assert len(body["messages"]) == 1


def test_month_out_of_range_is_a_400(app, populated):
    client = TestClient(app)
    response = client.get("/context", params={"month": "13"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == 400
    assert error["errors"][0]["reason"] == "outOfRange"
    assert error["errors"][0]["location"] == "month"


def test_unknown_event_is_a_400(app, populated):
    client = TestClient(app)
    response = client.get("/context", params={"eid": "404"})

    assert response.status_code == 400
    assert response.json()["error"]["errors"][0]["reason"] == "invalidParameter"


def test_unknown_calendar_is_a_404(app, populated):
    client = TestClient(app)
    response = client.get("/context", params={"phpcid": "77"})
    assert response.status_code == 404
    assert response.json()["error"]["errors"][0]["reason"] == "calendarNotFound"


@pytest.mark.parametrize(
    "params, status_code",
    [
        ({"phpcid": "99999999999999999999"}, 404),
        ({"eid": "99999999999999999999"}, 400),
        ({"month": "1" * 5000}, 400),
    ],
)
def test_huge_integers_are_client_errors(app, populated, params, status_code):
    client = TestClient(app)
    response = client.get("/context", params=params)
    assert response.status_code == status_code


def test_no_calendars_is_a_503(app):
    client = TestClient(app)
    response = client.get("/context")
    assert response.status_code == 503
    assert response.json()["error"]["errors"][0]["reason"] == "noCalendars"
