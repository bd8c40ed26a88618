# Transport facts: script path, host, port and scheme of the current request

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Optional

from starlette.requests import Request


DEFAULT_PORT = 80
TLS_PORT = 443


@dataclass(frozen=True)
class TransportMetadata:
    """Raw facts supplied by the transport layer."""

    script_name: str = "/"
    server_name: str = "localhost"
    server_port: Optional[int] = None
    tls: bool = False
    forwarded_proto: Optional[str] = None
    forwarded_ssl: Optional[str] = None
    accept_language: Optional[str] = None

    @classmethod
    def from_request(cls, request: Request) -> "TransportMetadata":
        url = request.url
        port = url.port
        if port is None and request.scope.get("server"):
            port = request.scope["server"][1]
        return cls(
            script_name=_script_name(request),
            server_name=url.hostname or "localhost",
            server_port=port,
            tls=request.scope.get("scheme") in ("https", "wss"),
            forwarded_proto=request.headers.get("x-forwarded-proto"),
            forwarded_ssl=request.headers.get("x-forwarded-ssl"),
            accept_language=request.headers.get("accept-language"),
        )


@dataclass(frozen=True)
class TransportFacts:
    script: str
    url_path: str
    host: str
    port: str
    scheme: str

    @property
    def server(self) -> str:
        return f"{self.host}{self.port}"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.server}{self.url_path}"

    @classmethod
    def from_metadata(cls, meta: TransportMetadata) -> "TransportFacts":
        return cls(
            script=meta.script_name,
            url_path=posixpath.dirname(meta.script_name),
            host=meta.server_name,
            port=render_port(meta.server_port),
            scheme=detect_scheme(meta),
        )


def render_port(port: Optional[int]) -> str:
    if not port or port == DEFAULT_PORT:
        return ""
    return f":{port}"


def detect_scheme(meta: TransportMetadata) -> str:
    if (
        meta.tls
        or meta.server_port == TLS_PORT
        or (meta.forwarded_proto or "").lower() == "https"
        or (meta.forwarded_ssl or "").lower() == "on"
    ):
        return "https"
    return "http"


def _script_name(request: Request) -> str:
    """Full request path, including the prefix the app is mounted under."""
    path = request.url.path
    root_path = request.scope.get("root_path", "").rstrip("/")
    # Some servers strip root_path from path, others leave it in
    if root_path and path != root_path and not path.startswith(root_path + "/"):
        path = root_path + path
    return path
