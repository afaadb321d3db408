# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Utilities for locating files above a directory."""

from __future__ import annotations

from pathlib import Path


def nearest_file(start: Path, name: str) -> Path | None:
    """Return the closest ``name`` in ``start`` or one of its ancestors.

    Args:
        start: Directory where the upward search begins.
        name: File name to look for.

    Returns:
        Path | None: The first match walking towards the filesystem root, or
        ``None`` when no ancestor contains ``name``.
    """

    for directory in (start, *start.parents):
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


__all__ = ["nearest_file"]
