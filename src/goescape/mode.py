# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Toggleable escape-analysis mode bound to a single document.

Enabling the mode runs the pipeline once and re-runs it after every save;
disabling it drops the save subscription and clears the annotations. Each run
resolves the package, invokes the compiler, then swaps the document's
annotation batch in one step.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from .annotations import DEFAULT_STYLE, AnnotationStore, AnnotationStyle, render_annotations
from .config import AnalysisConfig
from .constants import SOURCE_SUFFIX
from .document import DocumentView, Subscription
from .errors import NoBackingFile, UnsupportedDocument
from .extractor import analyse
from .logging import ConsoleMessenger
from .models import AnalysisOutcome
from .resolver import resolve

LOGGER = logging.getLogger(__name__)

AnalysisRunner = Callable[..., AnalysisOutcome]


class Messenger(Protocol):
    """User-facing status channel supplied by the host."""

    def info(self, message: str) -> None: ...

    def ok(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...


class ModeState(enum.Enum):
    """Whether the mode is attached to its document."""

    OFF = "off"
    ON = "on"


def _require_go_source(document: DocumentView) -> Path:
    path = document.path
    if path is None:
        raise NoBackingFile(document.document_id)
    if path.suffix != SOURCE_SUFFIX:
        raise UnsupportedDocument(path)
    return path


class ModeController:
    """Orchestrate resolve, extract and annotate for one document."""

    def __init__(
        self,
        document: DocumentView,
        *,
        config: AnalysisConfig | None = None,
        store: AnnotationStore | None = None,
        messenger: Messenger | None = None,
        runner: AnalysisRunner = analyse,
        style: AnnotationStyle = DEFAULT_STYLE,
    ) -> None:
        self.document = document
        self.config = config or AnalysisConfig()
        self.store = store if store is not None else AnnotationStore()
        self.messenger: Messenger = messenger or ConsoleMessenger(
            use_emoji=self.config.emoji,
            use_color=self.config.color,
        )
        self._runner = runner
        self._style = style
        self._state = ModeState.OFF
        self._subscription: Subscription | None = None
        self._run_lock = threading.Lock()
        self.last_outcome: AnalysisOutcome | None = None

    @property
    def state(self) -> ModeState:
        return self._state

    @property
    def enabled(self) -> bool:
        return self._state is ModeState.ON

    def enable(self) -> None:
        """Switch the mode on, run once and re-run after every save."""
        if self.enabled:
            return
        self._state = ModeState.ON
        self._subscription = self.document.subscribe_save(self._on_save)
        self.run()

    def disable(self) -> None:
        """Switch the mode off and remove every annotation from the document."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._state = ModeState.OFF
        self.store.clear(self.document)

    def toggle(self) -> ModeState:
        if self.enabled:
            self.disable()
        else:
            self.enable()
        return self._state

    def _on_save(self) -> None:
        if self.enabled:
            self.run()

    def run(self) -> AnalysisOutcome | None:
        """Run the full pipeline now, regardless of the mode state.

        Returns:
            AnalysisOutcome | None: The outcome of the run, or ``None`` when the
            document is unsupported or another run is already in progress.
        """

        if not self._run_lock.acquire(blocking=False):
            LOGGER.debug("dropping overlapping run for %s", self.document.document_id)
            return None
        try:
            return self._run_pipeline()
        finally:
            self._run_lock.release()

    def _run_pipeline(self) -> AnalysisOutcome | None:
        try:
            path = _require_go_source(self.document)
            unit_id = resolve(path)
        except NoBackingFile:
            self.messenger.warn("Buffer has no backing file")
            return None
        except UnsupportedDocument as exc:
            self.messenger.warn(str(exc))
            return None

        self.messenger.info(f"Analysing {unit_id}…")
        outcome = self._runner(self.document, unit_id, config=self.config)
        self.store.replace(
            self.document,
            lambda: render_annotations(self.document, outcome.diagnostics, style=self._style),
        )
        self.last_outcome = outcome

        if outcome.error is not None:
            self.messenger.warn(f"Unable to run {self.config.go_binary}: {outcome.error}")
        count = len(outcome.diagnostics)
        if count:
            self.messenger.ok(f"Found {count} escape diagnostic(s) in {path.name}")
        else:
            self.messenger.info(f"No escape diagnostics for {path.name}")
        return outcome


__all__ = ["AnalysisRunner", "Messenger", "ModeController", "ModeState"]
