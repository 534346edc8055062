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

"""Tests for the build-time query() expansion step."""

from __future__ import annotations

import textwrap

import pytest

import sparql_http_client.queries as queries_module
from sparql_http_client import (
    AskQueryString,
    Endpoint,
    SelectQueryString,
    SparqlClient,
    UnsupportedQueryError,
)
from sparql_http_client.build import Diagnostic, expand_source, main

MODULE = textwrap.dedent('''\
    """Queries used by the app."""

    from __future__ import annotations

    from sparql_http_client import query


    def ask(endpoint):
        return query(endpoint, """
            ASK { <urn:a> <urn:b> <urn:c> }  # literal check
        """)


    def select(endpoint):
        return query(endpoint, "SELECT ?s WHERE { ?s ?p ?o } LIMIT 1")
''')


@pytest.fixture()
def endpoint():
    return Endpoint(client=SparqlClient(), url="http://example.org/sparql")


def _run(source: str) -> dict:
    namespace: dict = {"__name__": "expanded"}
    exec(compile(source, "expanded.py", "exec"), namespace)
    return namespace


def test_expands_literal_calls(endpoint, monkeypatch):
    result = expand_source(MODULE, "app.py")
    assert result.ok
    assert result.data.queries == 2
    assert "_new_unchecked" in result.data.source
    assert "ASK { <urn:a> <urn:b> <urn:c> }" in result.data.source

    def fail(_text):
        raise AssertionError("expanded code must not classify at run time")

    monkeypatch.setattr(queries_module, "classify", fail)
    namespace = _run(result.data.source)

    asked = namespace["ask"](endpoint)
    assert asked.query == AskQueryString._new_unchecked("ASK { <urn:a> <urn:b> <urn:c> }", AskQueryString.KIND)
    assert asked.endpoint is endpoint
    assert isinstance(namespace["select"](endpoint).query, SelectQueryString)


def test_import_goes_after_future_imports():
    source = expand_source(MODULE).data.source
    lines = source.splitlines()
    assert lines.index("from __future__ import annotations") < lines.index(
        "import sparql_http_client as _sparql_http_client"
    )


def test_module_attribute_call(endpoint):
    source = textwrap.dedent('''\
        #!/usr/bin/env python3
        import sparql_http_client as sh

        def count(endpoint):
            return sh.query(endpoint, "SELECT (COUNT(*) AS ?n) WHERE { ?s ?p ?o }")
    ''')
    result = expand_source(source)
    assert result.ok
    assert result.data.queries == 1
    assert result.data.source.startswith("#!/usr/bin/env python3\n")
    bound = _run(result.data.source)["count"](endpoint)
    assert isinstance(bound.query, SelectQueryString)


def test_unrelated_query_untouched():
    source = "def query(a, b):\n    return a\n\nquery(1, 'not sparql')\n"
    result = expand_source(source)
    assert result.ok
    assert result.data.source == source
    assert result.data.queries == 0


def test_runtime_string_rejected():
    source = textwrap.dedent('''\
        from sparql_http_client import query

        def run(endpoint, text):
            return query(endpoint, text)
    ''')
    result = expand_source(source, "dyn.py")
    assert not result.ok
    [diagnostic] = result.error
    assert diagnostic.line == 4
    assert diagnostic.column == 28
    assert "string literal" in diagnostic.message


def test_fstring_rejected():
    source = 'from sparql_http_client import query as q\nq(ep, f"ASK {{ <urn:{x}> ?p ?o }}")\n'
    result = expand_source(source)
    assert "string literal" in result.error[0].message


def test_wrong_arity_rejected():
    source = 'from sparql_http_client import query\nquery("ASK { ?s ?p ?o }")\n'
    result = expand_source(source)
    assert "two positional arguments" in result.error[0].message


@pytest.mark.parametrize("bad", ["SELEKT * WHERE { ?s ?p ?o }", "ASK { <urn:a> ", "SELECT ?s WHERE"])
def test_syntax_error_matches_runtime_path(bad):
    source = f"from sparql_http_client import query\n\nx = query(ep, {bad!r})\n"
    result = expand_source(source, "bad.py")
    assert not result.ok
    [diagnostic] = result.error
    assert diagnostic == Diagnostic("bad.py", 3, 15, str(SelectQueryString.parse(bad).error))
    assert diagnostic.message == str(AskQueryString.parse(bad).error)
    assert str(diagnostic).startswith("bad.py:3:15: error: syntax error:")


def test_unsupported_form_rejected():
    source = 'from sparql_http_client import query\nquery(ep, "CONSTRUCT { ?s ?p ?o } WHERE { ?s ?p ?o }")\n'
    result = expand_source(source)
    assert result.error[0].message == str(UnsupportedQueryError(form="CONSTRUCT"))


def test_reports_every_bad_call():
    source = textwrap.dedent('''\
        from sparql_http_client import query
        a = query(ep, "ASK {")
        b = query(ep, "ASK { ?s ?p ?o }")
        c = query(ep, "SELECT")
    ''')
    result = expand_source(source)
    assert [d.line for d in result.error] == [2, 4]


def test_invalid_python():
    result = expand_source("def broken(:\n", "broken.py")
    assert result.error[0].message.startswith("invalid Python")


def test_cli_writes_expanded_tree(tmp_path):
    src = tmp_path / "src"
    (src / "pkg").mkdir(parents=True)
    (src / "pkg" / "app.py").write_text(MODULE, encoding="utf-8")
    out = tmp_path / "out"

    assert main([str(src), "--output", str(out)]) == 0
    assert "_new_unchecked" in (out / "pkg" / "app.py").read_text(encoding="utf-8")


def test_cli_check_mode_writes_nothing(tmp_path):
    file = tmp_path / "app.py"
    file.write_text(MODULE, encoding="utf-8")
    out = tmp_path / "out"

    assert main([str(file), "--output", str(out), "--check"]) == 0
    assert not out.exists()


def test_cli_fails_build_on_bad_literal(tmp_path):
    file = tmp_path / "app.py"
    file.write_text('from sparql_http_client import query\nquery(ep, "ASK {")\n', encoding="utf-8")

    assert main([str(file), "--output", str(tmp_path / "out")]) == 1


def test_diagnostic_column_counts_characters():
    source = 'from sparql_http_client import query\nx = "éé"; q = query(ep, "ASK {")\n'
    result = expand_source(source, "a.py")
    [diagnostic] = result.error
    assert (diagnostic.line, diagnostic.column) == (2, 25)
    assert str(diagnostic).startswith("a.py:2:25: error:")


def test_cli_rejects_colliding_outputs(tmp_path):
    for name in ("one", "two"):
        (tmp_path / name).mkdir()
        (tmp_path / name / "app.py").write_text(MODULE, encoding="utf-8")
    out = tmp_path / "out"

    code = main([str(tmp_path / "one" / "app.py"), str(tmp_path / "two" / "app.py"), "--output", str(out)])

    assert code == 1
    assert (out / "app.py").read_text(encoding="utf-8").count("_new_unchecked") == 2
