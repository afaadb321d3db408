# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised across the annotation pipeline."""

from __future__ import annotations

from pathlib import Path


class GoEscapeError(Exception):
    """Base class for pipeline errors."""


class NoBackingFile(GoEscapeError):
    """Raised when a document has no associated file path."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document '{document_id}' has no backing file")
        self.document_id = document_id


class UnsupportedDocument(GoEscapeError):
    """Raised when a document is not a Go source file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} is not a Go source file")
        self.path = path


class NoManifestFound(GoEscapeError):
    """Raised when no ``go.mod`` dominates a directory."""

    def __init__(self, start: Path) -> None:
        super().__init__(f"No go.mod found above {start}")
        self.start = start


class ManifestUnreadable(GoEscapeError):
    """Raised when a manifest exists but yields no module name."""

    def __init__(self, manifest: Path, reason: str) -> None:
        super().__init__(f"Cannot read module name from {manifest}: {reason}")
        self.manifest = manifest
        self.reason = reason


class ConfigError(GoEscapeError):
    """Raised when configuration input is invalid."""


__all__ = [
    "ConfigError",
    "GoEscapeError",
    "ManifestUnreadable",
    "NoBackingFile",
    "NoManifestFound",
    "UnsupportedDocument",
]
