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

"""Build step: validate and expand literal query() calls.

Scans Python sources for calls to ``sparql_http_client.query(endpoint, "...")``,
classifies each literal with the same classifier the runtime path uses, and
rewrites the call into

    (endpoint).build_query(
        _sparql_http_client.SelectQueryString._new_unchecked("<normalized>", ...QueryKind.SELECT)
    )

so the expanded module never parses SPARQL at run time. A malformed or
unsupported literal, or a query text that is not a literal, is a diagnostic
and fails the build.

Usage:
    sparql-http-client-build src/
    sparql-http-client-build src/ --output dist/expanded
    sparql-http-client-build src/ --check
"""

from __future__ import annotations

import argparse
import ast
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from sparql_http_client.classifier import classify
from sparql_http_client.logger import BuildSummary, get_logger
from sparql_http_client.queries import query_string_type
from sparql_http_client.result import Fail, Ok, Result

log = get_logger(__name__)

PACKAGE = "sparql_http_client"
RUNTIME_ALIAS = "_sparql_http_client"
_QUERY_MODULES = (PACKAGE, f"{PACKAGE}.queries")


@dataclass(frozen=True, slots=True)
class Diagnostic:
    path: str
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}: error: {self.message}"


@dataclass(frozen=True, slots=True)
class Expansion:
    source: str
    queries: int


@dataclass(frozen=True, slots=True)
class _Splice:
    start: int
    end: int
    code: str


# ── Call discovery ────────────────────────────────────────────

def _dotted(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        base = _dotted(node.value)
        return f"{base}.{node.attr}" if base else None
    return None


def _query_names(tree: ast.Module) -> set[str]:
    """Dotted names that refer to query() in this module."""
    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module in _QUERY_MODULES and not node.level:
            names.update(a.asname or a.name for a in node.names if a.name == "query")
        elif isinstance(node, ast.Import):
            names.update(
                f"{a.asname or a.name}.query" for a in node.names if a.name in _QUERY_MODULES
            )
    return names


class _CallFinder(ast.NodeVisitor):
    def __init__(self, names: set[str]) -> None:
        self.names = names
        self.calls: list[ast.Call] = []

    def visit_Call(self, node: ast.Call) -> None:
        if _dotted(node.func) in self.names:
            self.calls.append(node)
            return
        self.generic_visit(node)


# ── Expansion ─────────────────────────────────────────────────

def _line_offsets(raw: bytes) -> list[int]:
    offsets = [0]
    for line in raw.splitlines(keepends=True):
        offsets.append(offsets[-1] + len(line))
    return offsets


def _import_offset(tree: ast.Module, offsets: list[int]) -> int:
    """Byte offset just before the first statement after docstring and __future__ imports."""
    body = tree.body
    index = 0
    if body and isinstance(body[0], ast.Expr) and isinstance(body[0].value, ast.Constant) \
            and isinstance(body[0].value.value, str):
        index = 1
    while index < len(body) and isinstance(body[index], ast.ImportFrom) \
            and body[index].module == "__future__":
        index += 1
    anchor = body[index]
    decorators = getattr(anchor, "decorator_list", [])
    line = min([anchor.lineno] + [d.lineno for d in decorators])
    return offsets[line - 1]


class _Expander:
    def __init__(self, source: str, filename: str) -> None:
        self.source = source
        self.filename = filename
        self.raw = source.encode("utf-8")
        self.offsets = _line_offsets(self.raw)
        self.diagnostics: list[Diagnostic] = []

    def _column(self, node: ast.expr) -> int:
        """1-based character column; ast col_offset counts UTF-8 bytes."""
        start = self.offsets[node.lineno - 1]
        return len(self.raw[start:start + node.col_offset].decode("utf-8")) + 1

    def _diag(self, node: ast.expr, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(self.filename, node.lineno, self._column(node), message)
        )

    def expand_call(self, call: ast.Call) -> str | None:
        if call.keywords or len(call.args) != 2 or any(isinstance(a, ast.Starred) for a in call.args):
            self._diag(call, "query() takes exactly two positional arguments: an endpoint and a SPARQL string literal")
            return None

        endpoint, literal = call.args
        if not (isinstance(literal, ast.Constant) and isinstance(literal.value, str)):
            self._diag(
                literal,
                "query() requires a string literal; use parse_query() or "
                "SelectQueryString.parse() for query text built at run time",
            )
            return None

        classified = classify(literal.value)
        if not classified.ok:
            self._diag(literal, str(classified.error))
            return None

        kind = classified.data.kind
        qs_type = query_string_type(kind)
        endpoint_src = ast.get_source_segment(self.source, endpoint)
        log.info("%s:%d: %s query validated", self.filename, literal.lineno, kind.value)
        return (
            f"({endpoint_src}).build_query("
            f"{RUNTIME_ALIAS}.{qs_type.__name__}._new_unchecked("
            f"{classified.data.text!r}, {RUNTIME_ALIAS}.QueryKind.{kind.name}))"
        )


def expand_source(source: str, filename: str = "<string>") -> Result[Expansion, list[Diagnostic]]:
    """Expand every query() call in source, or report why the build must stop."""
    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as exc:
        return Fail(error=[Diagnostic(filename, exc.lineno or 1, exc.offset or 1, f"invalid Python: {exc.msg}")])

    finder = _CallFinder(_query_names(tree))
    finder.visit(tree)
    if not finder.calls:
        return Ok(data=Expansion(source=source, queries=0))

    expander = _Expander(source, filename)
    raw, offsets = expander.raw, expander.offsets

    splices: list[_Splice] = []
    for call in finder.calls:
        code = expander.expand_call(call)
        if code is None:
            continue
        splices.append(_Splice(
            start=offsets[call.lineno - 1] + call.col_offset,
            end=offsets[call.end_lineno - 1] + call.end_col_offset,
            code=code,
        ))

    if expander.diagnostics:
        return Fail(error=expander.diagnostics, context=filename)

    out = bytearray(raw)
    for splice in sorted(splices, key=lambda s: s.start, reverse=True):
        out[splice.start:splice.end] = splice.code.encode("utf-8")

    at = _import_offset(tree, offsets)
    out[at:at] = f"import {PACKAGE} as {RUNTIME_ALIAS}\n".encode("utf-8")

    return Ok(data=Expansion(source=out.decode("utf-8"), queries=len(splices)))


def expand_file(path: Path) -> Result[Expansion, list[Diagnostic]]:
    return expand_source(path.read_text(encoding="utf-8"), filename=str(path))


# ── CLI ───────────────────────────────────────────────────────

def _collect(paths: list[Path]) -> Iterator[tuple[Path, Path]]:
    """Yield (source file, output path relative to --output)."""
    for path in paths:
        if path.is_dir():
            for file in sorted(path.rglob("*.py")):
                yield file, file.relative_to(path)
        else:
            yield path, Path(path.name)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sparql-http-client-build",
        description="Validate SPARQL literals in query() calls and expand them into typed queries",
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="Python files or directories to expand",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("dist/expanded"),
        help="Output directory for expanded sources (default: dist/expanded)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only validate query literals; write nothing",
    )
    args = parser.parse_args(argv)

    summary = BuildSummary()
    files = summary.counter("files")
    queries = summary.counter("queries")
    output_dir = args.output.resolve()

    claimed: dict[Path, Path] = {}
    for source_path, relative in _collect(args.paths):
        if not source_path.exists():
            log.error("Source not found: %s", source_path)
            files.failed += 1
            continue

        owner = claimed.setdefault(relative, source_path)
        if owner != source_path:
            log.error("%s and %s both expand to %s", owner, source_path, output_dir / relative)
            files.failed += 1
            continue

        result = expand_file(source_path)
        if not result.ok:
            for diagnostic in result.error:
                log.error("%s", diagnostic)
            files.failed += 1
            queries.failed += len(result.error)
            continue

        files.ok += 1
        queries.ok += result.data.queries
        if args.check:
            continue

        target = output_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.data.source, encoding="utf-8")
        log.info("Wrote %s (%d queries)", target, result.data.queries)

    log.info(summary.report())
    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main())
