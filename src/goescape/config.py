# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and layered loading for escape analysis runs."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_ALLOW_LIST,
    DEFAULT_GO_BINARY,
    PROJECT_NAME,
    PYPROJECT_FILENAME,
    STANDALONE_CONFIG_FILENAME,
)
from .errors import ConfigError
from .paths import nearest_file

LOGGER = logging.getLogger(__name__)

NORMAL_DETAIL: Final[int] = 1
VERBOSE_DETAIL: Final[int] = 2
PYPROJECT_TOOL_KEY: Final[str] = "tool"


class AnalysisConfig(BaseModel):
    """Settings that shape how the compiler is invoked and which diagnostics survive."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    allow_list: tuple[str, ...] = Field(default=DEFAULT_ALLOW_LIST)
    detail_level: int = Field(default=NORMAL_DETAIL, ge=NORMAL_DETAIL)
    go_binary: str = DEFAULT_GO_BINARY
    emoji: bool = True
    color: bool = True

    @field_validator("allow_list", mode="before")
    @classmethod
    def _coerce_allow_list(cls, value: object) -> object:
        if isinstance(value, str):
            return (value,)
        return value

    @property
    def flags(self) -> str:
        """Return the compiler diagnostic flags for :attr:`detail_level`."""
        return detail_flags(self.detail_level)

    def with_overrides(self, **overrides: Any) -> AnalysisConfig:
        """Return a copy with ``None``-valued overrides ignored."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return load_fragment({**self.model_dump(), **updates}, source="overrides")


def detail_flags(level: int) -> str:
    """Map a detail level onto the compiler's ``-m`` flag string.

    Args:
        level: ``1`` for normal output, ``2`` (or more) for verbose output.

    Returns:
        str: ``"-m"`` or ``"-m -m"``.

    Raises:
        ConfigError: If ``level`` is below the normal tier.
    """

    if level < NORMAL_DETAIL:
        raise ConfigError(f"Detail level must be >= {NORMAL_DETAIL}, got {level}")
    if level >= VERBOSE_DETAIL:
        return "-m -m"
    return "-m"


def gcflags(unit_id: str, level: int) -> str:
    """Return the ``-gcflags`` value scoping diagnostics to ``unit_id``."""
    return f"{unit_id}={detail_flags(level)}"


@dataclass(slots=True, frozen=True)
class TomlConfigSource:
    """Read a flat configuration table from a TOML document."""

    path: Path
    table: tuple[str, ...] = ()

    def load(self) -> Mapping[str, Any]:
        """Return the configured table, or an empty mapping when absent.

        Raises:
            ConfigError: If the document is not valid TOML or the table is not a mapping.
        """

        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                data: Any = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Unable to read configuration at {self.path}: {exc}") from exc
        for key in self.table:
            if not isinstance(data, Mapping):
                return {}
            data = data.get(key, {})
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration at {self.path} must be a table")
        return dict(data)

    def describe(self) -> str:
        return f"{self.path} [{'.'.join(self.table)}]" if self.table else str(self.path)


def config_sources(root: Path) -> tuple[TomlConfigSource, ...]:
    """Return sources for ``root`` ordered from lowest to highest precedence.

    The nearest ``pyproject.toml`` and the nearest ``.goescape.toml`` above
    ``root`` are used; they may live in different directories.
    """

    sources: list[TomlConfigSource] = []
    absolute = root.absolute()
    pyproject = nearest_file(absolute, PYPROJECT_FILENAME)
    if pyproject is not None:
        sources.append(TomlConfigSource(pyproject, table=(PYPROJECT_TOOL_KEY, PROJECT_NAME)))
    standalone = nearest_file(absolute, STANDALONE_CONFIG_FILENAME)
    if standalone is not None:
        sources.append(TomlConfigSource(standalone))
    return tuple(sources)


def load_fragment(data: Mapping[str, Any], *, source: str) -> AnalysisConfig:
    """Validate ``data`` into an :class:`AnalysisConfig`, surfacing errors as :class:`ConfigError`."""
    try:
        return AnalysisConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration from {source}: {exc}") from exc


def load_config(root: Path, *, sources: Iterable[TomlConfigSource] | None = None) -> AnalysisConfig:
    """Load layered configuration for ``root``.

    Built-in defaults are overlaid by ``[tool.goescape]`` in ``pyproject.toml``
    and then by a standalone ``.goescape.toml``.

    Args:
        root: Directory where the upward search for configuration files starts.
        sources: Optional explicit sources replacing the defaults for ``root``.

    Returns:
        AnalysisConfig: The merged configuration.
    """

    merged: dict[str, Any] = {}
    described: list[str] = []
    for source in sources if sources is not None else config_sources(root):
        fragment = source.load()
        if fragment:
            merged.update(fragment)
            described.append(source.describe())
    LOGGER.debug("configuration sources=%s", described or ["defaults"])
    return load_fragment(merged, source=", ".join(described) or "defaults")


__all__ = [
    "AnalysisConfig",
    "NORMAL_DETAIL",
    "TomlConfigSource",
    "VERBOSE_DETAIL",
    "config_sources",
    "detail_flags",
    "gcflags",
    "load_config",
    "load_fragment",
]
