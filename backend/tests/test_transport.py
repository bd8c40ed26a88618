"""Tests for transport facts extraction."""

import pytest
from starlette.requests import Request

from calendar_view.core.transport import (
    TransportFacts,
    TransportMetadata,
    detect_scheme,
    render_port,
)


def test_plain_http_on_default_port():
    facts = TransportFacts.from_metadata(
        TransportMetadata(
            script_name="/calendar/index.php",
            server_name="example.org",
            server_port=80,
        )
    )

    assert facts.script == "/calendar/index.php"
    assert facts.url_path == "/calendar"
    assert facts.host == "example.org"
    assert facts.port == ""
    assert facts.server == "example.org"
    assert facts.scheme == "http"
    assert facts.base_url == "http://example.org/calendar"


def test_non_default_port_is_rendered():
    facts = TransportFacts.from_metadata(
        TransportMetadata(server_name="example.org", server_port=8080)
    )
    assert facts.port == ":8080"
    assert facts.server == "example.org:8080"


@pytest.mark.parametrize("port", [None, 0, 80])
def test_missing_or_default_port_renders_empty(port):
    assert render_port(port) == ""


@pytest.mark.parametrize(
    "meta",
    [
        TransportMetadata(tls=True),
        TransportMetadata(server_port=443),
        TransportMetadata(forwarded_proto="https"),
        TransportMetadata(forwarded_ssl="on"),
    ],
)
def test_https_indicators(meta):
    assert detect_scheme(meta) == "https"


def test_https_port_is_still_rendered():
    facts = TransportFacts.from_metadata(TransportMetadata(server_port=443))
    assert facts.scheme == "https"
    assert facts.port == ":443"


def test_forwarded_headers_other_values_stay_http():
    meta = TransportMetadata(forwarded_proto="http", forwarded_ssl="off")
    assert detect_scheme(meta) == "http"


def _request(path, root_path=""):
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "path": path,
            "root_path": root_path,
            "query_string": b"",
            "headers": [(b"host", b"cal.example")],
            "server": ("cal.example", 80),
        }
    )


@pytest.mark.parametrize(
    "path, root_path, script, url_path",
    [
        ("/context", "", "/context", "/"),
        # path already carries the mount prefix
        ("/cal/context", "/cal", "/cal/context", "/cal"),
        # path relative to the mount prefix
        ("/context", "/cal", "/cal/context", "/cal"),
        ("/calendar/context", "/cal", "/cal/calendar/context", "/cal/calendar"),
    ],
)
def test_from_request_includes_mount_prefix(path, root_path, script, url_path):
    meta = TransportMetadata.from_request(_request(path, root_path))
    assert meta.script_name == script
    assert TransportFacts.from_metadata(meta).url_path == url_path
