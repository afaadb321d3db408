# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for the go-escape package."""

from __future__ import annotations

from typing import Final

PROJECT_NAME: Final[str] = "goescape"
MANIFEST_NAME: Final[str] = "go.mod"
SOURCE_SUFFIX: Final[str] = ".go"
MARKER_GLYPH: Final[str] = "💡"
UNIT_SEPARATOR: Final[str] = "/"
ROOT_UNIT: Final[str] = "."
DEFAULT_GO_BINARY: Final[str] = "go"
DEFAULT_ALLOW_LIST: Final[tuple[str, ...]] = (
    "leaking param",
    "escapes to heap",
    "moved to heap",
)
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
STANDALONE_CONFIG_FILENAME: Final[str] = ".goescape.toml"

__all__ = [
    "DEFAULT_ALLOW_LIST",
    "DEFAULT_GO_BINARY",
    "MANIFEST_NAME",
    "MARKER_GLYPH",
    "PROJECT_NAME",
    "PYPROJECT_FILENAME",
    "ROOT_UNIT",
    "SOURCE_SUFFIX",
    "STANDALONE_CONFIG_FILENAME",
    "UNIT_SEPARATOR",
]
