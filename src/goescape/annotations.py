# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Annotation rendering and per-document ownership of live decorations."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from .constants import MARKER_GLYPH
from .document import Decoration, DocumentView
from .models import Diagnostic

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AnnotationStyle:
    """Non-destructive text style applied to annotation text."""

    italic: bool = True
    color: str = "yellow"

    def to_rich(self) -> str:
        """Return the style as a Rich style string."""
        parts = ["italic"] if self.italic else []
        parts.append(self.color)
        return " ".join(parts)


DEFAULT_STYLE = AnnotationStyle()


@dataclass(slots=True, frozen=True)
class Annotation:
    """A diagnostic bound to the decoration that displays it."""

    diagnostic: Diagnostic
    decoration: Decoration

    @property
    def text(self) -> str:
        return self.decoration.text

    @property
    def offset(self) -> int:
        return self.decoration.offset


def annotation_text(diagnostic: Diagnostic) -> str:
    """Return the display text for ``diagnostic``."""
    return f"{MARKER_GLYPH} {diagnostic.message}"


def render_annotations(
    document: DocumentView,
    diagnostics: Iterable[Diagnostic],
    *,
    style: AnnotationStyle = DEFAULT_STYLE,
) -> list[Annotation]:
    """Attach one end-of-line decoration per diagnostic.

    Diagnostics pointing past the end of the document are skipped since the
    buffer may have changed after the compiler ran. Several diagnostics on the
    same line stack as separate decorations in the order given.

    Args:
        document: Document receiving the decorations.
        diagnostics: Diagnostics in compiler output order.
        style: Style applied to each decoration.

    Returns:
        list[Annotation]: Newly created annotations, one per placed diagnostic.
    """

    rendered: list[Annotation] = []
    line_count = document.line_count()
    for diagnostic in diagnostics:
        if diagnostic.line > line_count:
            LOGGER.debug("skipping %s:%s beyond %s lines", diagnostic.source_file, diagnostic.line, line_count)
            continue
        offset = document.line_end_offset(diagnostic.line)
        decoration = document.add_decoration(offset, annotation_text(diagnostic), style.to_rich())
        rendered.append(Annotation(diagnostic=diagnostic, decoration=decoration))
    return rendered


class AnnotationStore:
    """Own the active annotations of each document.

    Every document's batch is replaced wholesale: :meth:`clear` detaches the
    previous batch before :meth:`install` records the next one, so a reader
    never observes annotations from two runs at once.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._batches: dict[str, list[Annotation]] = {}

    def annotations(self, document: DocumentView) -> tuple[Annotation, ...]:
        """Return the annotations currently installed for ``document``."""
        with self._lock:
            return tuple(self._batches.get(document.document_id, ()))

    def clear(self, document: DocumentView) -> None:
        """Detach and drop every annotation owned for ``document``."""
        with self._lock:
            batch = self._batches.pop(document.document_id, [])
            for annotation in batch:
                document.remove_decoration(annotation.decoration)

    def install(self, document: DocumentView, annotations: Sequence[Annotation]) -> None:
        """Record ``annotations`` as the document's current batch.

        Raises:
            RuntimeError: If the previous batch was not cleared first.
        """

        with self._lock:
            if self._batches.get(document.document_id):
                raise RuntimeError(f"Annotations for {document.document_id} must be cleared before install")
            self._batches[document.document_id] = list(annotations)

    def replace(
        self,
        document: DocumentView,
        factory: Callable[[], Sequence[Annotation]],
    ) -> tuple[Annotation, ...]:
        """Clear ``document`` then install the batch returned by ``factory``."""
        with self._lock:
            self.clear(document)
            batch = list(factory())
            self.install(document, batch)
            return tuple(batch)

    def forget(self, document: DocumentView) -> None:
        """Release everything held for a document that is being closed."""
        self.clear(document)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(batch) for batch in self._batches.values())


def annotated_lines(document: DocumentView, lines: Sequence[str]) -> list[tuple[str, tuple[str, ...]]]:
    """Pair each of ``lines`` with the decoration texts anchored at its end.

    Args:
        document: Document whose decorations are rendered.
        lines: The document's current lines.

    Returns:
        list[tuple[str, tuple[str, ...]]]: ``(line, annotation_texts)`` per line.
    """

    by_offset: dict[int, list[str]] = {}
    for decoration in document.decorations():
        by_offset.setdefault(decoration.offset, []).append(decoration.text)
    rendered: list[tuple[str, tuple[str, ...]]] = []
    for number, line in enumerate(lines, start=1):
        end = document.line_end_offset(number)
        rendered.append((line, tuple(by_offset.get(end, ()))))
    return rendered


__all__ = [
    "Annotation",
    "AnnotationStore",
    "AnnotationStyle",
    "DEFAULT_STYLE",
    "annotated_lines",
    "annotation_text",
    "render_annotations",
]
