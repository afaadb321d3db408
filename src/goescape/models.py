# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the goescape package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Diagnostic(BaseModel):
    """One escape-analysis diagnostic parsed from compiler output."""

    model_config = ConfigDict(frozen=True)

    source_file: str
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    message: str

    @field_validator("message", mode="before")
    @classmethod
    def _strip_message(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


def coerce_output_sequence(value: object) -> list[str]:
    """Normalise captured process output into a list of lines.

    Args:
        value: Output payload captured from the analysis tool.

    Returns:
        list[str]: Sequence of output lines represented as strings.
    """

    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    if isinstance(value, str):
        return value.splitlines()
    return [str(value)]


class AnalysisOutcome(BaseModel):
    """Result bundle produced by a single analysis run."""

    model_config = ConfigDict(validate_assignment=True)

    unit_id: str
    command: tuple[str, ...] = Field(default_factory=tuple)
    returncode: int | None = None
    output: list[str] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    error: str | None = None

    @field_validator("output", mode="before")
    @classmethod
    def _coerce_output(cls, value: object) -> list[str]:
        return coerce_output_sequence(value)

    @property
    def spawned(self) -> bool:
        """Return ``True`` when the analysis tool process was started."""
        return self.returncode is not None


__all__ = ["AnalysisOutcome", "Diagnostic", "coerce_output_sequence"]
