# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import pytest

MAIN_SOURCE = """package main

import "fmt"

type point struct{ x, y int }

func newPoint(x, y int) *point {
\tp := point{x, y}
\treturn &p
}

func show(p *point) {
\tfmt.Println(p.x, p.y)
}

func main() {
\tshow(newPoint(1, 2))
}
"""

ESCAPE_OUTPUT = """# example.com/demo
./main.go:7:6: can inline newPoint
./main.go:12:11: leaking param: p
./main.go:8:2: moved to heap: p
./main.go:13:13: ... argument does not escape
./other.go:3:6: moved to heap: q
./main.go:13:15: p.x escapes to heap
"""


@dataclass
class FakeGo:
    """Record ``go`` invocations and reply with canned output."""

    output: str = ESCAPE_OUTPUT
    returncode: int = 0
    calls: list[tuple[list[str], dict[str, object]]] = field(default_factory=list)

    def __call__(self, cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        self.calls.append((list(cmd), kwargs))
        return subprocess.CompletedProcess(cmd, self.returncode, self.output, None)


@pytest.fixture
def go_module(tmp_path: Path) -> Path:
    """Create a module rooted at ``tmp_path/demo`` with a ``main.go``."""
    root = tmp_path / "demo"
    root.mkdir()
    (root / "go.mod").write_text("module example.com/demo\n\ngo 1.22\n", encoding="utf-8")
    (root / "main.go").write_text(MAIN_SOURCE, encoding="utf-8")
    return root


@pytest.fixture
def fake_go(monkeypatch: pytest.MonkeyPatch) -> FakeGo:
    """Replace subprocess execution with a :class:`FakeGo` recorder."""
    fake = FakeGo()
    monkeypatch.setattr("goescape.process_utils.shutil.which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr("goescape.process_utils.subprocess.run", fake)
    return fake


@pytest.fixture
def missing_go(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the ``go`` executable unavailable on PATH."""
    monkeypatch.setattr("goescape.process_utils.shutil.which", lambda name: None)
