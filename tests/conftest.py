# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""Fixtures: an in-process stub SPARQL endpoint."""

from __future__ import annotations

import threading
import urllib.parse
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from sparql_http_client import Endpoint, SparqlClient, UserAgent

_PROXY_VARS = ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY", "all_proxy", "ALL_PROXY")


@dataclass
class RecordedRequest:
    path: str
    headers: dict[str, str]
    form: dict[str, list[str]]


@dataclass
class StubState:
    status: int = 200
    body: bytes = b"{}"
    content_type: str = "application/sparql-results+json"
    url: str = ""
    requests: list[RecordedRequest] = field(default_factory=list)

    def reply(self, status: int, body: bytes | str, content_type: str | None = None) -> None:
        self.status = status
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        if content_type is not None:
            self.content_type = content_type


class _StubHandler(BaseHTTPRequestHandler):
    state: StubState

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length", 0))
        raw = self.rfile.read(length).decode("utf-8")
        self.state.requests.append(
            RecordedRequest(
                path=self.path,
                headers={k.lower(): v for k, v in self.headers.items()},
                form=urllib.parse.parse_qs(raw),
            )
        )
        self.send_response(self.state.status)
        self.send_header("Content-Type", self.state.content_type)
        self.send_header("Content-Length", str(len(self.state.body)))
        self.end_headers()
        self.wfile.write(self.state.body)

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture()
def stub():
    """Run a stub endpoint on localhost; yields its StubState."""
    state = StubState()
    handler = type("Handler", (_StubHandler,), {"state": state})
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    state.url = f"http://127.0.0.1:{server.server_address[1]}/sparql"
    yield state
    server.shutdown()
    server.server_close()


@pytest.fixture()
def endpoint(stub, monkeypatch):
    """Endpoint pointed at the stub, with proxies disabled."""
    for var in _PROXY_VARS:
        monkeypatch.delenv(var, raising=False)
    client = SparqlClient(UserAgent(name="test-suite", version="1.2.3", contact="ops@example.org"))
    return Endpoint(client=client, url=stub.url)
