# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console status messages for the annotation pipeline.

:class:`ConsoleMessenger` is the host messaging channel used by the mode
controller and the CLI. Each message level maps to an emoji prefix and a Rich
style; consoles are shared per colour/emoji combination.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import cache
from typing import Final, Literal

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

Level = Literal["info", "ok", "warn", "fail"]


@dataclass(frozen=True, slots=True)
class LevelFormat:
    """Prefix and style used when printing one message level."""

    prefix: str
    style: str


LEVELS: Final[dict[Level, LevelFormat]] = {
    "info": LevelFormat(prefix="ℹ️ ", style="cyan"),
    "ok": LevelFormat(prefix="✅ ", style="green"),
    "warn": LevelFormat(prefix="⚠️ ", style="yellow"),
    "fail": LevelFormat(prefix="❌ ", style="red"),
}


def stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def _console(color: bool, emoji: bool, tty: bool) -> Console:
    return Console(
        color_system="auto" if color and tty else None,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


def get_console(*, color: bool, emoji: bool) -> Console:
    """Return the shared console for the given presentation flags.

    Colour is only enabled when stdout is a terminal, so piped output and
    captured test output stay plain.
    """

    return _console(color, emoji, stdout_is_tty())


@dataclass(slots=True)
class ConsoleMessenger:
    """Print pipeline status messages with optional emoji and colour.

    ``use_color=None`` follows terminal detection; ``False`` forces plain text.
    """

    use_emoji: bool = True
    use_color: bool | None = None

    @property
    def color_enabled(self) -> bool:
        return stdout_is_tty() if self.use_color is None else self.use_color

    @property
    def console(self) -> Console:
        return get_console(color=self.color_enabled, emoji=self.use_emoji)

    def emit(self, level: Level, message: str) -> None:
        """Print ``message`` using the prefix and style registered for ``level``."""
        fmt = LEVELS[level]
        text = Text(f"{fmt.prefix if self.use_emoji else ''}{message}")
        if self.color_enabled:
            text.stylize(fmt.style)
        self.console.print(text)

    def info(self, message: str) -> None:
        self.emit("info", message)

    def ok(self, message: str) -> None:
        self.emit("ok", message)

    def warn(self, message: str) -> None:
        self.emit("warn", message)

    def fail(self, message: str) -> None:
        self.emit("fail", message)

    def section(self, title: str) -> None:
        """Print a header separating one block of output from the next."""
        if self.color_enabled and stdout_is_tty():
            self.console.print()
            self.console.print(Rule(title))
        else:
            self.console.print(Text(f"\n--- {title} ---"))


__all__ = ["ConsoleMessenger", "LEVELS", "Level", "LevelFormat", "get_console", "stdout_is_tty"]
