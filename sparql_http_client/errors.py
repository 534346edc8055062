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

"""Error values carried by Fail results.

Each failure mode has its own frozen dataclass so callers can tell them
apart with isinstance() or a match statement. str() gives the message
used in logs and build diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sparql_http_client.classifier import QueryKind


# ── Query strings ─────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class SparqlSyntaxError:
    """The SPARQL grammar rejected the query text."""

    message: str

    def __str__(self) -> str:
        return f"syntax error: {self.message}"


@dataclass(frozen=True, slots=True)
class UnsupportedQueryError:
    """Valid SPARQL, but a form this client cannot run (CONSTRUCT, UPDATE, ...)."""

    form: str

    def __str__(self) -> str:
        return f"{self.form} queries are not supported; only SELECT and ASK queries are"


@dataclass(frozen=True, slots=True)
class KindMismatchError:
    """Valid query text of a different kind than the target type."""

    expected: QueryKind
    provided: QueryKind

    def __str__(self) -> str:
        return f"expected {self.expected.value} query but got {self.provided.value}"


QueryStringError = SparqlSyntaxError | UnsupportedQueryError | KindMismatchError


# ── Transport / decode ────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TransportError:
    """The HTTP exchange failed or the endpoint answered with an error status.

    status is None when no HTTP response was received at all.
    """

    message: str
    status: int | None = None
    body: str = ""

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class DecodeError:
    """A success response did not match the SPARQL JSON Results shape."""

    message: str

    def __str__(self) -> str:
        return f"decode error: {self.message}"


# ── Config ────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ConfigError:
    message: str

    def __str__(self) -> str:
        return self.message


class QueryBuildError(Exception):
    """Raised by an unexpanded query() call whose literal fails classification."""

    def __init__(self, error: SparqlSyntaxError | UnsupportedQueryError) -> None:
        super().__init__(str(error))
        self.error = error
