# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors)."""

from __future__ import annotations

from ..logging import ConsoleMessenger


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


def build_cli_logger(*, emoji: bool, color: bool = True) -> ConsoleMessenger:
    """Return a messenger configured for the provided emoji and colour preferences."""

    return ConsoleMessenger(use_emoji=emoji, use_color=None if color else False)


__all__ = ["CLIError", "build_cli_logger"]
