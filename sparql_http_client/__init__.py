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

"""Typed SPARQL HTTP client: validated query strings, JSON Results decoding."""

__version__ = "0.2.0"

from sparql_http_client.classifier import ClassifiedQuery, QueryKind, classify, normalize
from sparql_http_client.client import Endpoint, SparqlClient, UserAgent
from sparql_http_client.config import ClientConfig, load_config
from sparql_http_client.errors import (
    ConfigError,
    DecodeError,
    KindMismatchError,
    QueryBuildError,
    QueryStringError,
    SparqlSyntaxError,
    TransportError,
    UnsupportedQueryError,
)
from sparql_http_client.queries import (
    AskQuery,
    AskQueryString,
    QueryString,
    SelectQuery,
    SelectQueryString,
    SparqlQuery,
    parse_query,
    query,
    query_string_type,
)
from sparql_http_client.response import (
    AskResult,
    QueryResult,
    SelectResult,
    decode_ask,
    decode_response,
    decode_select,
)
from sparql_http_client.result import Fail, Ok, Result
from sparql_http_client.terms import (
    BlankNode,
    Iri,
    LangLiteral,
    Literal,
    RDFTerm,
    TypedLiteral,
    decode_term,
)

__all__ = [
    "AskQuery",
    "AskQueryString",
    "AskResult",
    "BlankNode",
    "ClassifiedQuery",
    "ClientConfig",
    "ConfigError",
    "DecodeError",
    "Endpoint",
    "Fail",
    "Iri",
    "KindMismatchError",
    "LangLiteral",
    "Literal",
    "Ok",
    "QueryBuildError",
    "QueryKind",
    "QueryResult",
    "QueryString",
    "QueryStringError",
    "RDFTerm",
    "Result",
    "SelectQuery",
    "SelectQueryString",
    "SelectResult",
    "SparqlClient",
    "SparqlQuery",
    "SparqlSyntaxError",
    "TransportError",
    "TypedLiteral",
    "UnsupportedQueryError",
    "UserAgent",
    "classify",
    "decode_ask",
    "decode_response",
    "decode_select",
    "decode_term",
    "load_config",
    "normalize",
    "parse_query",
    "query",
    "query_string_type",
]
