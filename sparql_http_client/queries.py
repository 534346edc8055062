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

"""Typed, validated SPARQL query strings and their endpoint binding.

Two ways to obtain a query string, same postcondition:

    SelectQueryString.parse(text)          runtime: always classifies
    SelectQueryString._new_unchecked(...)  trusted: emitted by the build step
                                           for literals it already classified

Each class declares its QueryKind and the result type its execution decodes
into, so SparqlQuery.run() needs no runtime branching on the kind.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar, assert_never

from sparql_http_client.classifier import QueryKind, classify
from sparql_http_client.errors import (
    DecodeError,
    KindMismatchError,
    QueryBuildError,
    QueryStringError,
    TransportError,
)
from sparql_http_client.logger import get_logger
from sparql_http_client.response import AskResult, SelectResult, decode_ask, decode_select
from sparql_http_client.result import Fail, Ok, Result

if TYPE_CHECKING:
    from sparql_http_client.client import Endpoint

log = get_logger(__name__)

R = TypeVar("R")

_TRUSTED = object()


class QueryString(Generic[R]):
    """An owned, validated, normalized SPARQL query string."""

    KIND: ClassVar[QueryKind]
    FORM_FIELD: ClassVar[str] = "query"
    _decoder: ClassVar[Callable[[bytes], Result[Any, DecodeError]]]

    __slots__ = ("_text",)

    def __init__(self, text: str, kind: QueryKind, *, _token: object = None) -> None:
        if _token is not _TRUSTED:
            raise TypeError(f"use {type(self).__name__}.parse() to create a query string")
        if kind is not self.KIND:
            raise ValueError(f"{type(self).__name__} cannot hold a {kind.value} query")
        self._text = text

    @classmethod
    def parse(cls, text: str) -> Result[Self, QueryStringError]:
        """Classify text and wrap it if it is a query of this class's kind."""
        classified = classify(text)
        if not classified.ok:
            return classified
        if classified.data.kind is not cls.KIND:
            return Fail(
                error=KindMismatchError(expected=cls.KIND, provided=classified.data.kind),
                context=text,
            )
        return Ok(data=cls._new_unchecked(classified.data.text, classified.data.kind))

    @classmethod
    def _new_unchecked(cls, text: str, kind: QueryKind) -> Self:
        """Wrap text that was already classified as ``kind``. Does not re-parse."""
        return cls(text, kind, _token=_TRUSTED)

    @property
    def text(self) -> str:
        return self._text

    def decode(self, body: bytes) -> Result[R, DecodeError]:
        return type(self)._decoder(body)

    def build(self, endpoint: Endpoint) -> SparqlQuery[R]:
        """Bind this query to endpoint. Endpoint.build_query reads better."""
        return SparqlQuery(endpoint=endpoint, query=self)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._text == other._text  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._text))


class SelectQueryString(QueryString[SelectResult]):
    KIND = QueryKind.SELECT
    _decoder = staticmethod(decode_select)
    __slots__ = ()


class AskQueryString(QueryString[AskResult]):
    KIND = QueryKind.ASK
    _decoder = staticmethod(decode_ask)
    __slots__ = ()


def query_string_type(kind: QueryKind) -> type[QueryString[Any]]:
    """Query string class for a kind. New QueryKind members must be added here."""
    match kind:
        case QueryKind.SELECT:
            return SelectQueryString
        case QueryKind.ASK:
            return AskQueryString
        case _:
            assert_never(kind)


def parse_query(text: str) -> Result[QueryString[Any], QueryStringError]:
    """Classify text and wrap it in the query string class of its kind."""
    classified = classify(text)
    if not classified.ok:
        return classified
    qs_type = query_string_type(classified.data.kind)
    return Ok(data=qs_type._new_unchecked(classified.data.text, classified.data.kind))


# ── Bound query ───────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class SparqlQuery(Generic[R]):
    """A query string bound to an endpoint, ready for one exchange."""

    endpoint: Endpoint
    query: QueryString[R]

    def run(self, timeout: float | None = None) -> Result[R, TransportError | DecodeError]:
        """POST the query and decode the body into the query's result type.

        No timeout is applied unless the caller passes one. Error responses
        come back as TransportError and are never decoded.
        """
        sent = self.endpoint.post({self.query.FORM_FIELD: self.query.text}, timeout=timeout)
        if not sent.ok:
            return sent
        return self.query.decode(sent.data)


SelectQuery = SparqlQuery[SelectResult]
AskQuery = SparqlQuery[AskResult]


def query(endpoint: Endpoint, text: str) -> SparqlQuery[Any]:
    """Bind a literal SPARQL query to endpoint.

    The build step (``sparql-http-client-build``) rewrites calls to this
    function into pre-classified query strings and fails the build on
    malformed literals. Left unexpanded, the literal is classified here and
    a failure raises QueryBuildError.
    """
    log.debug("query() running without build-time expansion")
    parsed = parse_query(text)
    if not parsed.ok:
        raise QueryBuildError(parsed.error)
    return endpoint.build_query(parsed.data)
