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

"""RDF term model for SPARQL JSON Results bindings.

One RDFTerm per bound cell: the lexical value plus a kind describing its
shape. Kinds are small frozen dataclasses so callers can pattern-match:

    match term:
        case RDFTerm(kind=Iri()): ...
        case RDFTerm(kind=LangLiteral(lang="en")): ...
        case RDFTerm(kind=Literal()): ...   # any literal
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rdflib import term as rdflib_term

from sparql_http_client.errors import DecodeError
from sparql_http_client.result import Fail, Ok, Result


# ── Term kinds ────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Iri:
    pass


@dataclass(frozen=True, slots=True)
class BlankNode:
    pass


@dataclass(frozen=True, slots=True)
class Literal:
    """A literal. Plain instances are simple literals; subclasses carry tags."""


@dataclass(frozen=True, slots=True)
class LangLiteral(Literal):
    lang: str


@dataclass(frozen=True, slots=True)
class TypedLiteral(Literal):
    datatype: str


TermKind = Iri | BlankNode | Literal


# ── Term ──────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class RDFTerm:
    """A single RDF term: the value bound to a variable in one result row."""

    value: str
    kind: TermKind

    def is_iri(self) -> bool:
        return isinstance(self.kind, Iri)

    def is_literal(self) -> bool:
        return isinstance(self.kind, Literal)

    def is_blank_node(self) -> bool:
        return isinstance(self.kind, BlankNode)

    def lang(self) -> str | None:
        """Language tag if this is a language-tagged literal."""
        if isinstance(self.kind, LangLiteral):
            return self.kind.lang
        return None

    def datatype(self) -> str | None:
        """Datatype IRI if this is a datatyped literal."""
        if isinstance(self.kind, TypedLiteral):
            return self.kind.datatype
        return None

    def to_rdflib(self) -> rdflib_term.Identifier:
        """Convert to the equivalent rdflib term."""
        match self.kind:
            case Iri():
                return rdflib_term.URIRef(self.value)
            case BlankNode():
                return rdflib_term.BNode(self.value)
            case LangLiteral(lang=lang):
                return rdflib_term.Literal(self.value, lang=lang)
            case TypedLiteral(datatype=datatype):
                return rdflib_term.Literal(self.value, datatype=rdflib_term.URIRef(datatype))
            case _:
                return rdflib_term.Literal(self.value)


# ── Decoding ──────────────────────────────────────────────────

def _literal_kind(raw: dict[str, Any]) -> Result[Literal, DecodeError]:
    lang = raw.get("xml:lang")
    datatype = raw.get("datatype")

    if lang is not None and datatype is not None:
        return Fail(error=DecodeError("literal has both 'xml:lang' and 'datatype'"), context=raw)
    if lang is not None:
        if not isinstance(lang, str):
            return Fail(error=DecodeError("'xml:lang' must be a string"), context=raw)
        return Ok(data=LangLiteral(lang=lang))
    if datatype is not None:
        if not isinstance(datatype, str):
            return Fail(error=DecodeError("'datatype' must be a string"), context=raw)
        return Ok(data=TypedLiteral(datatype=datatype))
    return Ok(data=Literal())


def decode_term(raw: Any) -> Result[RDFTerm, DecodeError]:
    """Decode one binding object ``{"type": ..., "value": ...}`` into an RDFTerm."""
    if not isinstance(raw, dict):
        return Fail(error=DecodeError(f"binding must be an object, got {type(raw).__name__}"))

    term_type = raw.get("type")
    value = raw.get("value")
    if not isinstance(term_type, str):
        return Fail(error=DecodeError("binding is missing string field 'type'"), context=raw)
    if not isinstance(value, str):
        return Fail(error=DecodeError("binding is missing string field 'value'"), context=raw)

    match term_type:
        case "uri":
            return Ok(data=RDFTerm(value=value, kind=Iri()))
        case "bnode":
            return Ok(data=RDFTerm(value=value, kind=BlankNode()))
        case "literal":
            kind = _literal_kind(raw)
            if not kind.ok:
                return kind
            return Ok(data=RDFTerm(value=value, kind=kind.data))
        case _:
            return Fail(error=DecodeError(f"unknown term type {term_type!r}"), context=raw)
