# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for annotation rendering and the per-document store."""

from __future__ import annotations

import pytest

from goescape.annotations import (
    AnnotationStore,
    AnnotationStyle,
    annotated_lines,
    render_annotations,
)
from goescape.document import TextDocument
from goescape.models import Diagnostic


def _diag(line: int, message: str, column: int = 1) -> Diagnostic:
    return Diagnostic(source_file="./main.go", line=line, column=column, message=message)


def _doc() -> TextDocument:
    return TextDocument(text="package main\n\nfunc f(p *int) {\n\tx := 1\n}\n", document_id="main.go")


def test_render_anchors_at_line_end() -> None:
    doc = _doc()

    rendered = render_annotations(doc, [_diag(3, "leaking param: p"), _diag(4, "moved to heap: x")])

    assert [a.text for a in rendered] == ["💡 leaking param: p", "💡 moved to heap: x"]
    assert [a.offset for a in rendered] == [doc.line_end_offset(3), doc.line_end_offset(4)]
    assert all(a.decoration.style == "italic yellow" for a in rendered)


def test_render_skips_lines_beyond_document() -> None:
    doc = _doc()

    rendered = render_annotations(doc, [_diag(40, "moved to heap: y"), _diag(1, "escapes to heap")])

    assert [a.diagnostic.line for a in rendered] == [1]


def test_same_line_diagnostics_stack() -> None:
    doc = _doc()

    render_annotations(doc, [_diag(3, "leaking param: p", 8), _diag(3, "moved to heap: q", 10)])

    assert annotated_lines(doc, doc.lines())[2] == (
        "func f(p *int) {",
        ("💡 leaking param: p", "💡 moved to heap: q"),
    )


def test_clear_is_idempotent() -> None:
    doc = _doc()
    store = AnnotationStore()
    store.install(doc, render_annotations(doc, [_diag(1, "escapes to heap")]))

    store.clear(doc)
    store.clear(doc)

    assert store.annotations(doc) == ()
    assert doc.decorations() == ()


def test_replace_never_shows_union_of_runs() -> None:
    doc = _doc()
    store = AnnotationStore()
    diagnostics = [_diag(3, "leaking param: p"), _diag(4, "moved to heap: x")]

    first = store.replace(doc, lambda: render_annotations(doc, diagnostics))
    second = store.replace(doc, lambda: render_annotations(doc, diagnostics))

    assert store.annotations(doc) == second
    assert len(doc.decorations()) == 2
    assert not any(a.decoration.active for a in first)
    assert [(a.text, a.offset) for a in first] == [(a.text, a.offset) for a in second]


def test_install_requires_clear() -> None:
    doc = _doc()
    store = AnnotationStore()
    store.install(doc, render_annotations(doc, [_diag(1, "escapes to heap")]))

    with pytest.raises(RuntimeError):
        store.install(doc, [])


def test_documents_are_isolated() -> None:
    first, second = _doc(), TextDocument(text="package other\n", document_id="other.go")
    store = AnnotationStore()
    store.install(first, render_annotations(first, [_diag(1, "escapes to heap")]))
    store.install(second, render_annotations(second, [_diag(1, "moved to heap: z")]))

    store.forget(first)

    assert store.annotations(first) == ()
    assert len(store.annotations(second)) == 1
    assert len(store) == 1


def test_style_without_italic() -> None:
    assert AnnotationStyle(italic=False, color="red").to_rich() == "red"


def test_form_feed_keeps_annotations_on_compiler_lines() -> None:
    doc = TextDocument(text="package main\n\x0c\nfunc f(p *int) {\n}\n", document_id="ff.go")

    render_annotations(doc, [_diag(3, "leaking param: p")])

    assert annotated_lines(doc, doc.lines()) == [
        ("package main", ()),
        ("\x0c", ()),
        ("func f(p *int) {", ("💡 leaking param: p",)),
        ("}", ()),
    ]


def test_line_separator_inside_comment() -> None:
    doc = TextDocument(text="package main\n// a\u2028b\nvar x = 1\nfunc f() {}\n", document_id="ls.go")

    render_annotations(doc, [_diag(4, "moved to heap: x")])

    rows = annotated_lines(doc, doc.lines())
    assert len(rows) == 4
    assert rows[3] == ("func f() {}", ("💡 moved to heap: x",))


def test_large_document_preview() -> None:
    body = "".join(f"\tx{n} := make([]byte, {n})  // padding padding padding padding\n" for n in range(20000))
    doc = TextDocument(text=f"package main\nfunc f() {{\n{body}}}\n", document_id="big.go")
    diagnostics = [_diag(line, f"make([]byte, {line - 3}) escapes to heap") for line in range(3, 20003, 97)]

    rendered = render_annotations(doc, diagnostics)
    rows = annotated_lines(doc, doc.lines())

    assert len(rendered) == len(diagnostics)
    assert len(rows) == doc.line_count() == 20003
    assert rows[2 + 97][1] == ("💡 make([]byte, 97) escapes to heap",)
