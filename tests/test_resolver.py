# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for package identifier resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from goescape.errors import ManifestUnreadable, NoBackingFile, NoManifestFound
from goescape.resolver import find_manifest, read_module_name, resolve


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_quoted_module_with_subdirectory(tmp_path: Path) -> None:
    _write(tmp_path / "p" / "go.mod", 'module "example.com/foo"\n')
    document = _write(tmp_path / "p" / "sub" / "x.go", "package sub\n")

    assert resolve(document) == "example.com/foo/sub"


def test_module_root_uses_bare_module_name(tmp_path: Path) -> None:
    _write(tmp_path / "p" / "go.mod", 'module "example.com/foo"\n')
    document = _write(tmp_path / "p" / "x.go", "package foo\n")

    assert resolve(document) == "example.com/foo"


def test_bareword_module_and_nested_path(tmp_path: Path) -> None:
    _write(tmp_path / "go.mod", "// comment\nmodule github.com/acme/tool\n\ngo 1.22\n")
    document = _write(tmp_path / "internal" / "cache" / "lru.go", "package cache\n")

    assert resolve(document) == "github.com/acme/tool/internal/cache"


def test_nearest_manifest_wins(tmp_path: Path) -> None:
    _write(tmp_path / "go.mod", "module outer\n")
    _write(tmp_path / "nested" / "go.mod", "module inner\n")
    document = _write(tmp_path / "nested" / "pkg" / "a.go", "package pkg\n")

    assert find_manifest(document.parent) == tmp_path / "nested" / "go.mod"
    assert resolve(document) == "inner/pkg"


def test_fallback_to_directory_name_without_manifest(tmp_path: Path) -> None:
    document = _write(tmp_path / "scratchpkg" / "main.go", "package main\n")

    assert resolve(document) == "scratchpkg"


def test_manifest_without_module_falls_back(tmp_path: Path) -> None:
    manifest = _write(tmp_path / "go.mod", "go 1.22\n")
    document = _write(tmp_path / "widgets" / "w.go", "package widgets\n")

    with pytest.raises(ManifestUnreadable):
        read_module_name(manifest)
    assert resolve(document) == "widgets"


def test_find_manifest_raises_when_absent(tmp_path: Path) -> None:
    with pytest.raises(NoManifestFound):
        find_manifest(tmp_path, name="does-not-exist.mod")


@pytest.mark.parametrize("value", [None, ""])
def test_missing_path_raises(value: str | None) -> None:
    with pytest.raises(NoBackingFile):
        resolve(value)


def test_file_at_filesystem_root_uses_current_package(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("goescape.resolver.nearest_file", lambda start, name: None)

    assert resolve(Path("/x.go")) == "."
