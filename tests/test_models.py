# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic and outcome models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from goescape.models import AnalysisOutcome, Diagnostic


def test_diagnostic_strips_message() -> None:
    diag = Diagnostic(source_file="./main.go", line=3, column=7, message="  moved to heap: x \n")

    assert diag.message == "moved to heap: x"


@pytest.mark.parametrize(("line", "column"), [(0, 1), (1, 0)])
def test_diagnostic_positions_are_one_based(line: int, column: int) -> None:
    with pytest.raises(ValidationError):
        Diagnostic(source_file="./main.go", line=line, column=column, message="leaking param: p")


def test_diagnostic_is_immutable() -> None:
    diag = Diagnostic(source_file="./main.go", line=1, column=1, message="escapes to heap")

    with pytest.raises(ValidationError):
        diag.line = 2  # type: ignore[misc]


def test_outcome_splits_output() -> None:
    outcome = AnalysisOutcome(unit_id="demo", returncode=0, output="a\nb\n")

    assert outcome.output == ["a", "b"]
    assert outcome.spawned
    assert not AnalysisOutcome(unit_id="demo", error="boom").spawned
