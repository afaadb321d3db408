# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Inline Go escape-analysis annotations for open source documents."""

from __future__ import annotations

from .annotations import AnnotationStore, render_annotations
from .config import AnalysisConfig, detail_flags
from .document import TextDocument
from .extractor import extract
from .mode import ModeController, ModeState
from .models import Diagnostic
from .resolver import resolve

__all__ = [
    "AnalysisConfig",
    "AnnotationStore",
    "Diagnostic",
    "ModeController",
    "ModeState",
    "TextDocument",
    "detail_flags",
    "extract",
    "render_annotations",
    "resolve",
]
