# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the Go package identifier that owns a source file.

The nearest ``go.mod`` above the file supplies the module path; the file's
directory relative to that manifest is appended to form the package import
path handed to ``-gcflags``. Without a usable manifest the bare name of the
containing directory is used instead.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Final

from .constants import MANIFEST_NAME, ROOT_UNIT, UNIT_SEPARATOR
from .errors import ManifestUnreadable, NoBackingFile, NoManifestFound
from .paths import nearest_file

LOGGER = logging.getLogger(__name__)

MODULE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r'^\s*module\s+(?:"(?P<quoted>[^"]*)"|(?P<bare>[^\s"]+))',
)


def find_manifest(start: Path, *, name: str = MANIFEST_NAME) -> Path:
    """Return the nearest ``name`` file in ``start`` or any of its ancestors.

    Raises:
        NoManifestFound: If no ancestor directory contains the manifest.
    """

    manifest = nearest_file(start, name)
    if manifest is None:
        raise NoManifestFound(start)
    return manifest


def read_module_name(manifest: Path) -> str:
    """Return the module path declared by the first ``module`` directive in ``manifest``.

    Raises:
        ManifestUnreadable: If the file cannot be read or declares no module.
    """

    try:
        text = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestUnreadable(manifest, str(exc)) from exc
    for raw_line in text.splitlines():
        match = MODULE_PATTERN.match(raw_line)
        if match is None:
            continue
        name = match.group("quoted") if match.group("quoted") is not None else match.group("bare")
        if name:
            return name
    raise ManifestUnreadable(manifest, "no module declaration")


def resolve(file_path: str | Path | None) -> str:
    """Return the unit identifier for the document stored at ``file_path``.

    Args:
        file_path: Path of the open document; ``None`` or empty for scratch buffers.

    Returns:
        str: ``<module>`` or ``<module>/<subdir>`` when a manifest dominates the
        file, otherwise the name of the file's containing directory (``"."``
        for a file at the filesystem root).

    Raises:
        NoBackingFile: If ``file_path`` is unset.
    """

    if file_path is None or not str(file_path):
        raise NoBackingFile("<unsaved>")
    directory = Path(file_path).absolute().parent
    try:
        manifest = find_manifest(directory)
        module = read_module_name(manifest)
    except (NoManifestFound, ManifestUnreadable) as exc:
        LOGGER.debug("falling back to directory name: %s", exc)
        return directory.name or ROOT_UNIT

    relative = directory.relative_to(manifest.parent)
    if relative == Path():
        return module
    return f"{module}{UNIT_SEPARATOR}{relative.as_posix()}"


__all__ = ["MODULE_PATTERN", "find_manifest", "read_module_name", "resolve"]
