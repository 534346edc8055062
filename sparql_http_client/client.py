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

"""SPARQL HTTP client using urllib.

Sends form-encoded POST requests to a SPARQL endpoint and returns the raw
response body. No query knowledge: decoding belongs to the query string.
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from http.client import HTTPException, HTTPResponse
from typing import TYPE_CHECKING, TypeVar

import certifi

from sparql_http_client import __version__
from sparql_http_client.errors import TransportError
from sparql_http_client.logger import get_logger
from sparql_http_client.result import Fail, Ok, Result

if TYPE_CHECKING:
    from sparql_http_client.queries import QueryString, SparqlQuery

log = get_logger(__name__)

R = TypeVar("R")

RESULTS_JSON = "application/sparql-results+json"


def _default_ssl_context() -> ssl.SSLContext:
    return ssl.create_default_context(cafile=certifi.where())


@dataclass(frozen=True, slots=True)
class UserAgent:
    name: str = "sparql-http-client"
    version: str = __version__
    contact: str = ""

    def header_value(self) -> str:
        return f"{self.name}/{self.version} ({self.contact})"


@dataclass(frozen=True, slots=True)
class SparqlClient:
    """Client configuration shared by every endpoint built from it."""

    user_agent: UserAgent = field(default_factory=UserAgent)
    ssl_context: ssl.SSLContext = field(
        default_factory=_default_ssl_context, repr=False, compare=False
    )

    def endpoint(self, url: str) -> Endpoint:
        return Endpoint(client=self, url=url)

    def open(self, req: urllib.request.Request, timeout: float | None) -> HTTPResponse:
        if timeout is None:
            return urllib.request.urlopen(req, context=self.ssl_context)
        return urllib.request.urlopen(req, timeout=timeout, context=self.ssl_context)


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A SPARQL endpoint URL plus the client configuration used to reach it."""

    client: SparqlClient
    url: str

    def build_query(self, query: QueryString[R]) -> SparqlQuery[R]:
        return query.build(self)

    def post(
        self,
        form: dict[str, str],
        timeout: float | None = None,
    ) -> Result[bytes, TransportError]:
        """POST a form-encoded body and return the success response body."""
        encoded_body = urllib.parse.urlencode(form).encode("utf-8")

        req = urllib.request.Request(
            self.url,
            data=encoded_body,
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Accept": RESULTS_JSON,
                "User-Agent": self.client.user_agent.header_value(),
            },
            method="POST",
        )

        log.info("SPARQL query → %s (%d bytes)", self.url, len(encoded_body))

        try:
            with self.client.open(req, timeout) as resp:
                body: bytes = resp.read()
        except urllib.error.HTTPError as exc:
            error_body = exc.read().decode("utf-8", errors="replace")
            return Fail(
                error=TransportError(
                    message=f"SPARQL HTTP {exc.code}: {exc.reason}",
                    status=exc.code,
                    body=error_body,
                ),
                context=self.url,
            )
        except urllib.error.URLError as exc:
            return Fail(error=TransportError(message=f"SPARQL connection error: {exc.reason}"), context=self.url)
        except TimeoutError:
            return Fail(error=TransportError(message=f"SPARQL timeout after {timeout}s"), context=self.url)
        except (ConnectionError, HTTPException) as exc:
            return Fail(error=TransportError(message=f"SPARQL connection error: {exc}"), context=self.url)

        log.info("SPARQL response: %d bytes", len(body))
        return Ok(data=body)
