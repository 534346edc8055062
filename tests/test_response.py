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

"""Tests for SPARQL JSON Results document decoding."""

from __future__ import annotations

import json

from sparql_http_client import AskResult, DecodeError, SelectResult, decode_ask, decode_response, decode_select

SELECT_DOC = {
    "head": {"vars": ["obj", "label"]},
    "results": {
        "bindings": [
            {"obj": {"type": "uri", "value": "http://creativecommons.org/publicdomain/zero/1.0/"}},
            {
                "obj": {"type": "literal", "value": "1.0.0"},
                "label": {"type": "literal", "value": "release", "xml:lang": "en"},
            },
            {
                "obj": {
                    "datatype": "http://www.w3.org/2001/XMLSchema#dateTime",
                    "type": "literal",
                    "value": "2023-01-30T23:00:08Z",
                }
            },
        ]
    },
}


def test_select_document():
    result = decode_select(json.dumps(SELECT_DOC).encode("utf-8"))
    assert result.ok
    select = result.data
    assert select.vars == ("obj", "label")
    assert len(select) == 3
    first, second, third = select
    assert first["obj"].is_iri()
    assert first.get("label") is None
    assert second["label"].lang() == "en"
    assert third["obj"].datatype() == "http://www.w3.org/2001/XMLSchema#dateTime"


def test_decoding_is_deterministic():
    body = json.dumps(SELECT_DOC)
    assert decode_select(body) == decode_select(body)


def test_row_order_preserved():
    doc = {
        "head": {"vars": ["n"]},
        "results": {"bindings": [{"n": {"type": "literal", "value": v}} for v in "cab"]},
    }
    select = decode_select(json.dumps(doc)).data
    assert [row["n"].value for row in select] == ["c", "a", "b"]


def test_head_link():
    doc = {"head": {"vars": [], "link": ["http://example.org/meta"]}, "results": {"bindings": []}}
    select = decode_select(json.dumps(doc)).data
    assert select == SelectResult(vars=(), rows=(), link=("http://example.org/meta",))


def test_ask_document():
    result = decode_ask(b'{ "head" : { } , "boolean" : true }')
    assert result.ok
    assert result.data == AskResult(boolean=True)
    assert bool(result.data) is True
    assert not decode_ask(b'{"head": {}, "boolean": false}').data


def test_select_errors():
    for body in (
        b"not json",
        b"[]",
        b'{"results": {"bindings": []}}',
        b'{"head": {"vars": "s"}, "results": {"bindings": []}}',
        b'{"head": {"vars": ["s"]}}',
        b'{"head": {"vars": ["s"]}, "results": {"bindings": [{"s": {"type": "nope", "value": "x"}}]}}',
    ):
        result = decode_select(body)
        assert not result.ok, body
        assert isinstance(result.error, DecodeError)


def test_ask_errors():
    for body in (b'{"head": {}}', b'{"head": {}, "boolean": "true"}'):
        result = decode_ask(body)
        assert not result.ok
        assert isinstance(result.error, DecodeError)


def test_conflicting_literal_is_decode_error():
    doc = {
        "head": {"vars": ["x"]},
        "results": {"bindings": [{"x": {"type": "literal", "value": "5", "xml:lang": "en", "datatype": "urn:t"}}]},
    }
    result = decode_select(json.dumps(doc))
    assert not result.ok
    assert "'x'" in result.error.message


def test_untagged_decode():
    assert isinstance(decode_response(b'{"head": {}, "boolean": false}').data, AskResult)
    assert isinstance(decode_response(json.dumps(SELECT_DOC)).data, SelectResult)
