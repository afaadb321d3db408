# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse Go compiler ``-m`` output into escape diagnostics."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .constants import DEFAULT_ALLOW_LIST, SOURCE_SUFFIX
from .models import Diagnostic

DIAGNOSTIC_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<file>.+?{re.escape(SOURCE_SUFFIX)}):(?P<line>\d+):(?P<column>\d+): (?P<message>.*)$",
)


def _ensure_lines(value: Sequence[str] | str) -> list[str]:
    if isinstance(value, str):
        return value.splitlines()
    return [str(item) for item in value]


def iter_pattern_matches(
    lines: Sequence[str],
    pattern: re.Pattern[str],
    *,
    skip_blank: bool = True,
) -> Iterator[re.Match[str]]:
    """Yield regex matches from ``lines``, ignoring anything that does not match.

    Args:
        lines: Sequence of raw lines emitted by a tool.
        pattern: Compiled regular expression used to match diagnostic lines.
        skip_blank: When ``True`` blank lines are ignored.

    Yields:
        re.Match[str]: Match objects produced by ``pattern``.
    """

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if skip_blank and not line.strip():
            continue
        match = pattern.match(line)
        if match:
            yield match


def document_aliases(document_path: Path) -> frozenset[str]:
    """Return the spellings the compiler may use for ``document_path``.

    ``go build .`` reports files as ``./<name>.go``, while builds started from
    elsewhere report absolute paths.
    """

    absolute = document_path.absolute()
    return frozenset({f"./{document_path.name}", str(absolute), absolute.as_posix()})


def is_interesting(message: str, allow_list: Sequence[str]) -> bool:
    """Return ``True`` when ``message`` contains any allow-listed substring."""
    return any(entry in message for entry in allow_list)


@dataclass(slots=True, frozen=True)
class EscapeParser:
    """Line-grammar parser scoped to one document and an allow-list."""

    document_path: Path
    allow_list: tuple[str, ...] = DEFAULT_ALLOW_LIST

    def parse(self, output: Sequence[str] | str) -> list[Diagnostic]:
        """Return diagnostics for the document in the order they were emitted.

        Args:
            output: Combined compiler output as text or pre-split lines.

        Returns:
            list[Diagnostic]: Retained diagnostics; empty when nothing matched.
        """

        aliases = document_aliases(self.document_path)
        results: list[Diagnostic] = []
        for match in iter_pattern_matches(_ensure_lines(output), DIAGNOSTIC_PATTERN):
            if match.group("file") not in aliases:
                continue
            message = match.group("message").strip()
            if not is_interesting(message, self.allow_list):
                continue
            line_no = int(match.group("line"))
            column = int(match.group("column"))
            if line_no < 1 or column < 1:
                continue
            results.append(
                Diagnostic(
                    source_file=match.group("file"),
                    line=line_no,
                    column=column,
                    message=message,
                ),
            )
        return results


def parse_escape_output(
    output: Sequence[str] | str,
    *,
    document_path: Path,
    allow_list: Sequence[str] = DEFAULT_ALLOW_LIST,
) -> list[Diagnostic]:
    """Parse ``output`` for ``document_path`` using ``allow_list``."""
    return EscapeParser(document_path=document_path, allow_list=tuple(allow_list)).parse(output)


__all__ = [
    "DIAGNOSTIC_PATTERN",
    "EscapeParser",
    "document_aliases",
    "is_interesting",
    "iter_pattern_matches",
    "parse_escape_output",
]
