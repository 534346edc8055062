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

"""SPARQL query classifier.

Grammar checking is delegated to rdflib's SPARQL parser. This module maps
the parsed query's top-level form to a QueryKind and produces a normalized
text that is safe to embed verbatim in generated code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from pyparsing import ParseBaseException
from rdflib.plugins.sparql import prepareQuery
from rdflib.plugins.sparql.parser import parseUpdate

from sparql_http_client.errors import SparqlSyntaxError, UnsupportedQueryError
from sparql_http_client.result import Fail, Ok, Result


class QueryKind(Enum):
    """Query forms this client can run."""

    SELECT = "SELECT"
    ASK = "ASK"


@dataclass(frozen=True, slots=True)
class ClassifiedQuery:
    text: str
    kind: QueryKind


ClassifyError = SparqlSyntaxError | UnsupportedQueryError


# ── Normalization ─────────────────────────────────────────────

# Order matters: long strings before short ones, IRIs before '<' operators.
_TOKEN = re.compile(
    r'''
    (?P<keep>
        """(?:[^"\\]|\\.|"(?!""))*"""
      | \'\'\'(?:[^'\\]|\\.|'(?!''))*\'\'\'
      | "(?:[^"\\\n\r]|\\.)*"
      | '(?:[^'\\\n\r]|\\.)*'
      | <(?:[^<>"{}|^`\\\x00-\x20]|\\u[0-9A-Fa-f]{4}|\\U[0-9A-Fa-f]{8})*>
    )
  | (?P<gap>(?:\s+|\#[^\r\n]*)+)
  | (?P<other>(?:[^\s#"'<\\]|\\.)+|.)
    ''',
    re.VERBOSE | re.DOTALL,
)


def normalize(text: str) -> str:
    """Drop comments and collapse whitespace outside literals and IRIs.

    Idempotent: normalize(normalize(t)) == normalize(t).
    """
    parts: list[str] = []
    pending_gap = False
    for match in _TOKEN.finditer(text):
        if match.lastgroup == "gap":
            pending_gap = True
            continue
        if pending_gap and parts:
            parts.append(" ")
        pending_gap = False
        parts.append(match.group())
    return "".join(parts)


# ── Classification ────────────────────────────────────────────

def _update_form(text: str) -> bool:
    """True if text is a non-empty SPARQL Update request."""
    try:
        update = parseUpdate(text)
    except ParseBaseException:
        return False
    return bool(update.request)


def _algebra_name(kind: QueryKind) -> str:
    """Name of the rdflib algebra root for a query of this kind."""
    match kind:
        case QueryKind.SELECT:
            return "SelectQuery"
        case QueryKind.ASK:
            return "AskQuery"
        case _:
            assert_never(kind)


_KIND_BY_ALGEBRA: dict[str, QueryKind] = {_algebra_name(kind): kind for kind in QueryKind}


def _form_name(algebra_name: str) -> str:
    return algebra_name.removesuffix("Query").upper()


def _kind_of(text: str) -> Result[QueryKind, ClassifyError]:
    try:
        prepared = prepareQuery(text)
    except ParseBaseException as exc:
        if _update_form(text):
            return Fail(error=UnsupportedQueryError(form="UPDATE"), context=text)
        return Fail(error=SparqlSyntaxError(message=str(exc)), context=text)
    except Exception as exc:  # rdflib raises bare Exception for unknown prefixes
        return Fail(error=SparqlSyntaxError(message=str(exc)), context=text)

    algebra_name: str = prepared.algebra.name
    kind = _KIND_BY_ALGEBRA.get(algebra_name)
    if kind is None:
        return Fail(error=UnsupportedQueryError(form=_form_name(algebra_name)), context=text)
    return Ok(data=kind)


def classify(text: str) -> Result[ClassifiedQuery, ClassifyError]:
    """Parse text and return its normalized form and QueryKind.

    The normalized text is parsed again and must classify the same way, so
    a query string never carries text that did not pass the grammar check.
    """
    kind = _kind_of(text)
    if not kind.ok:
        return kind

    normalized = normalize(text)
    if normalized != text:
        recheck = _kind_of(normalized)
        if not recheck.ok or recheck.data is not kind.data:
            return Fail(
                error=SparqlSyntaxError(message=f"normalization changed the query: {normalized!r}"),
                context=text,
            )

    return Ok(data=ClassifiedQuery(text=normalized, kind=kind.data))
