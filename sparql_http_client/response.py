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

"""SPARQL 1.1 JSON Results documents → SelectResult / AskResult.

SELECT:  {"head": {"vars": [...]}, "results": {"bindings": [{var: term}, ...]}}
ASK:     {"head": {}, "boolean": true}
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from sparql_http_client.errors import DecodeError
from sparql_http_client.result import Fail, Ok, Result
from sparql_http_client.terms import RDFTerm, decode_term

Row = dict[str, RDFTerm]


@dataclass(frozen=True, slots=True)
class SelectResult:
    """Projected variables plus rows in the order the endpoint sent them.

    Unbound variables are absent from a row, so ``row.get(var)`` is None.
    """

    vars: tuple[str, ...]
    rows: tuple[Row, ...]
    link: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True, slots=True)
class AskResult:
    boolean: bool
    link: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.boolean


QueryResult = SelectResult | AskResult


# ── Helpers ───────────────────────────────────────────────────

def _load(body: bytes | str) -> Result[dict[str, Any], DecodeError]:
    try:
        raw = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return Fail(error=DecodeError(f"invalid JSON: {exc}"))
    if not isinstance(raw, dict):
        return Fail(error=DecodeError("results document must be a JSON object"))
    return Ok(data=raw)


def _string_list(raw: Any, name: str) -> Result[tuple[str, ...], DecodeError]:
    if not isinstance(raw, list) or not all(isinstance(v, str) for v in raw):
        return Fail(error=DecodeError(f"'{name}' must be a list of strings"))
    return Ok(data=tuple(raw))


def _head(doc: dict[str, Any]) -> Result[dict[str, Any], DecodeError]:
    head = doc.get("head", {})
    if not isinstance(head, dict):
        return Fail(error=DecodeError("'head' must be an object"))
    return Ok(data=head)


def _link(head: dict[str, Any]) -> Result[tuple[str, ...], DecodeError]:
    if head.get("link") is None:
        return Ok(data=())
    return _string_list(head["link"], "head.link")


def _decode_row(raw: Any) -> Result[Row, DecodeError]:
    if not isinstance(raw, dict):
        return Fail(error=DecodeError("each binding row must be an object"))
    row: Row = {}
    for var, cell in raw.items():
        term = decode_term(cell)
        if not term.ok:
            return Fail(error=DecodeError(f"variable '{var}': {term.error.message}"), context=term.context)
        row[var] = term.data
    return Ok(data=row)


# ── Decoders ──────────────────────────────────────────────────

def _select_from(doc: dict[str, Any]) -> Result[SelectResult, DecodeError]:
    head = _head(doc)
    if not head.ok:
        return head
    if "vars" not in head.data:
        return Fail(error=DecodeError("missing 'head.vars'"))
    variables = _string_list(head.data["vars"], "head.vars")
    if not variables.ok:
        return variables
    link = _link(head.data)
    if not link.ok:
        return link

    results = doc.get("results")
    if not isinstance(results, dict) or not isinstance(results.get("bindings"), list):
        return Fail(error=DecodeError("missing 'results.bindings' list"))

    rows: list[Row] = []
    for raw_row in results["bindings"]:
        row = _decode_row(raw_row)
        if not row.ok:
            return row
        rows.append(row.data)

    return Ok(data=SelectResult(vars=variables.data, rows=tuple(rows), link=link.data))


def _ask_from(doc: dict[str, Any]) -> Result[AskResult, DecodeError]:
    head = _head(doc)
    if not head.ok:
        return head
    link = _link(head.data)
    if not link.ok:
        return link
    boolean = doc.get("boolean")
    if not isinstance(boolean, bool):
        return Fail(error=DecodeError("missing boolean field 'boolean'"))
    return Ok(data=AskResult(boolean=boolean, link=link.data))


def decode_select(body: bytes | str) -> Result[SelectResult, DecodeError]:
    """Decode a SELECT results document."""
    doc = _load(body)
    if not doc.ok:
        return doc
    return _select_from(doc.data)


def decode_ask(body: bytes | str) -> Result[AskResult, DecodeError]:
    """Decode an ASK results document."""
    doc = _load(body)
    if not doc.ok:
        return doc
    return _ask_from(doc.data)


def decode_response(body: bytes | str) -> Result[QueryResult, DecodeError]:
    """Decode either shape, telling them apart by the 'boolean' member."""
    doc = _load(body)
    if not doc.ok:
        return doc
    if "boolean" in doc.data:
        return _ask_from(doc.data)
    return _select_from(doc.data)
