# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .annotate import annotate_command, resolve_command

app = typer.Typer(
    name="go-escape",
    help="Annotate Go source with compiler escape-analysis diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("annotate")(annotate_command)
app.command("resolve")(resolve_command)

__all__ = ["app"]
