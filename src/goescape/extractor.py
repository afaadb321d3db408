# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invoke the Go compiler and extract escape diagnostics for one document."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence
from pathlib import Path

from .config import AnalysisConfig, gcflags
from .document import DocumentView
from .errors import NoBackingFile
from .models import AnalysisOutcome, Diagnostic
from .parsers import EscapeParser
from .process_utils import run_merged

LOGGER = logging.getLogger(__name__)


def build_command(unit_id: str, config: AnalysisConfig) -> tuple[str, ...]:
    """Return the ``go build`` invocation that prints escape analysis for ``unit_id``."""
    return (config.go_binary, "build", f"-gcflags={gcflags(unit_id, config.detail_level)}", ".")


def _document_path(document: DocumentView) -> Path:
    if document.path is None:
        raise NoBackingFile(document.document_id)
    return document.path


def analyse(document: DocumentView, unit_id: str, *, config: AnalysisConfig) -> AnalysisOutcome:
    """Run the compiler against the document's directory and parse its output.

    Spawn failures and non-zero exit statuses are recorded on the returned
    outcome rather than raised; whatever text was captured is still parsed
    because the compiler prints escape analysis even when the build fails.

    Args:
        document: Open document whose diagnostics are wanted.
        unit_id: Package identifier produced by :func:`goescape.resolver.resolve`.
        config: Allow-list, detail level and tool location.

    Returns:
        AnalysisOutcome: Command, exit status, captured output and diagnostics.

    Raises:
        NoBackingFile: If the document has no path.
    """

    path = _document_path(document)
    command = build_command(unit_id, config)
    outcome = AnalysisOutcome(unit_id=unit_id, command=command)
    LOGGER.debug("command=%s cwd=%s", shlex.join(command), path.parent)
    try:
        completed = run_merged(command, cwd=path.parent)
    except OSError as exc:
        LOGGER.debug("unable to spawn %s: %s", command[0], exc)
        outcome.error = str(exc)
        return outcome

    outcome.returncode = completed.returncode
    outcome.output = completed.stdout
    if completed.returncode != 0:
        LOGGER.debug("%s exited with status %s", command[0], completed.returncode)
    parser = EscapeParser(document_path=path, allow_list=tuple(config.allow_list))
    outcome.diagnostics = parser.parse(outcome.output)
    return outcome


def extract(document: DocumentView, unit_id: str, *, config: AnalysisConfig) -> Sequence[Diagnostic]:
    """Return the allow-listed diagnostics the compiler reports for ``document``."""
    return analyse(document, unit_id, config=config).diagnostics


__all__ = ["analyse", "build_command", "extract"]
