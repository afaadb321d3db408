# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Document view abstraction and an in-memory implementation.

Hosts expose open buffers through :class:`DocumentView`. The pipeline only
reads line positions from a view and attaches zero-width decorations to it;
:class:`TextDocument` provides a self-contained implementation whose
decoration anchors follow insertions and deletions.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

SaveCallback = Callable[[], None]

_UNTITLED_COUNTER = itertools.count(1)


@dataclass(slots=True, eq=False)
class Decoration:
    """Zero-width visual marker anchored at a character offset."""

    offset: int
    text: str
    style: str
    active: bool = True


@dataclass(slots=True, eq=False)
class Subscription:
    """Handle returned by :meth:`DocumentView.subscribe_save`."""

    _callbacks: list[SaveCallback]
    callback: SaveCallback

    @property
    def active(self) -> bool:
        return any(entry is self.callback for entry in self._callbacks)

    def unsubscribe(self) -> None:
        """Stop delivering save events; calling twice is harmless."""
        for index, entry in enumerate(self._callbacks):
            if entry is self.callback:
                del self._callbacks[index]
                return


@runtime_checkable
class DocumentView(Protocol):
    """Host-side view of an open document."""

    @property
    def document_id(self) -> str:  # pragma: no cover - protocol definition
        """Return a stable identifier for the open document."""
        ...

    @property
    def path(self) -> Path | None:  # pragma: no cover - protocol definition
        """Return the backing file path, or ``None`` for scratch buffers."""
        ...

    def line_count(self) -> int:  # pragma: no cover - protocol definition
        """Return the number of lines currently in the document."""
        ...

    def line_end_offset(self, line: int) -> int:  # pragma: no cover - protocol definition
        """Return the offset just before the newline ending 1-based ``line``."""
        ...

    def add_decoration(self, offset: int, text: str, style: str) -> Decoration:  # pragma: no cover
        """Attach a zero-width decoration at ``offset``."""
        ...

    def remove_decoration(self, decoration: Decoration) -> None:  # pragma: no cover
        """Detach ``decoration`` from the document."""
        ...

    def decorations(self) -> tuple[Decoration, ...]:  # pragma: no cover - protocol definition
        """Return the decorations currently attached to the document."""
        ...

    def subscribe_save(self, callback: SaveCallback) -> Subscription:  # pragma: no cover
        """Invoke ``callback`` after every save until unsubscribed."""
        ...


@dataclass(eq=False)
class TextDocument:
    """In-memory document whose decorations track edits."""

    text: str = ""
    path: Path | None = None
    document_id: str = ""
    _decorations: list[Decoration] = field(default_factory=list, init=False, repr=False)
    _save_callbacks: list[SaveCallback] = field(default_factory=list, init=False, repr=False)
    _starts: list[int] = field(default_factory=list, init=False, repr=False)
    _starts_text: str | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.path is not None:
            self.path = Path(self.path)
        if not self.document_id:
            self.document_id = (
                str(self.path.absolute()) if self.path is not None else f"untitled-{next(_UNTITLED_COUNTER)}"
            )

    @classmethod
    def open(cls, path: Path) -> TextDocument:
        """Load ``path`` from disk into a new document."""
        return cls(text=path.read_text(encoding="utf-8"), path=path)

    def _line_starts(self) -> list[int]:
        # Only "\n" ends a line, as in the Go compiler's position counting.
        if self._starts_text is not self.text:
            starts = [0]
            starts.extend(index + 1 for index, char in enumerate(self.text) if char == "\n")
            if starts[-1] == len(self.text) and len(starts) > 1:
                starts.pop()
            self._starts = starts
            self._starts_text = self.text
        return self._starts

    def line_count(self) -> int:
        if not self.text:
            return 0
        return len(self._line_starts())

    def line_end_offset(self, line: int) -> int:
        """Return the offset of the end of 1-based ``line``.

        Raises:
            IndexError: If ``line`` is outside the document.
        """

        starts = self._line_starts()
        if not self.text or line < 1 or line > len(starts):
            raise IndexError(f"line {line} outside document of {self.line_count()} lines")
        if line < len(starts):
            return starts[line] - 1
        return len(self.text) - 1 if self.text.endswith("\n") else len(self.text)

    def lines(self) -> list[str]:
        """Return the document split on ``"\\n"``, one entry per :meth:`line_count`."""
        if not self.text:
            return []
        pieces = self.text.split("\n")
        if self.text.endswith("\n"):
            pieces.pop()
        return pieces

    # decorations -------------------------------------------------------

    def add_decoration(self, offset: int, text: str, style: str) -> Decoration:
        if not 0 <= offset <= len(self.text):
            raise IndexError(f"offset {offset} outside document")
        decoration = Decoration(offset=offset, text=text, style=style)
        self._decorations.append(decoration)
        return decoration

    def remove_decoration(self, decoration: Decoration) -> None:
        decoration.active = False
        self._decorations = [entry for entry in self._decorations if entry is not decoration]

    def decorations(self) -> tuple[Decoration, ...]:
        return tuple(self._decorations)

    # edits -------------------------------------------------------------

    def insert(self, offset: int, text: str) -> None:
        """Insert ``text`` at ``offset``; anchors after the insertion point shift right."""
        if not 0 <= offset <= len(self.text):
            raise IndexError(f"offset {offset} outside document")
        self.text = self.text[:offset] + text + self.text[offset:]
        for decoration in self._decorations:
            if decoration.offset > offset:
                decoration.offset += len(text)

    def delete(self, start: int, end: int) -> None:
        """Delete ``[start, end)``; anchors inside the range collapse to ``start``."""
        if not 0 <= start <= end <= len(self.text):
            raise IndexError(f"range {start}:{end} outside document")
        self.text = self.text[:start] + self.text[end:]
        removed = end - start
        for decoration in self._decorations:
            if decoration.offset >= end:
                decoration.offset -= removed
            elif decoration.offset > start:
                decoration.offset = start

    # save events -------------------------------------------------------

    def subscribe_save(self, callback: SaveCallback) -> Subscription:
        self._save_callbacks.append(callback)
        return Subscription(self._save_callbacks, callback)

    def save(self) -> None:
        """Write the buffer to its path, then notify save subscribers in order."""
        if self.path is not None:
            self.path.write_text(self.text, encoding="utf-8")
        for callback in list(self._save_callbacks):
            callback()


__all__ = ["Decoration", "DocumentView", "SaveCallback", "Subscription", "TextDocument"]
