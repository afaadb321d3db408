# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI commands that run the annotation pipeline on a file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.text import Text

from ..annotations import DEFAULT_STYLE, AnnotationStore, annotated_lines
from ..config import AnalysisConfig, load_config
from ..document import TextDocument
from ..errors import ConfigError, NoBackingFile
from ..logging import ConsoleMessenger
from ..mode import ModeController
from ..resolver import resolve
from .shared import CLIError, build_cli_logger

FileArgument = Annotated[
    Path,
    typer.Argument(help="Go source file to analyse.", exists=True, dir_okay=False, resolve_path=True),
]


def _load_settings(
    root: Path,
    *,
    detail: int | None,
    allow: list[str] | None,
    emoji: bool,
    color: bool,
) -> AnalysisConfig:
    return load_config(root).with_overrides(
        detail_level=detail,
        allow_list=tuple(allow) if allow else None,
        emoji=emoji,
        color=color,
    )


def _print_annotated(document: TextDocument, *, logger: ConsoleMessenger) -> None:
    logger.section(document.path.name if document.path else document.document_id)
    style = DEFAULT_STYLE.to_rich() if logger.color_enabled else None
    width = len(str(document.line_count()))
    for number, (line, notes) in enumerate(annotated_lines(document, document.lines()), start=1):
        text = Text(f"{number:>{width}} │ {line}")
        for note in notes:
            text.append(f"  {note}", style=style)
        logger.console.print(text)


def run_annotate(file: Path, config: AnalysisConfig, *, logger: ConsoleMessenger) -> TextDocument:
    """Run the pipeline once over ``file`` and return the annotated document.

    Raises:
        CLIError: If the file is not analysable or the compiler could not be started.
    """

    document = TextDocument.open(file)
    controller = ModeController(document, config=config, store=AnnotationStore(), messenger=logger)
    outcome = controller.run()
    if outcome is None:
        raise CLIError(f"Cannot analyse {file}")
    if not outcome.spawned:
        raise CLIError(outcome.error or f"Unable to run {config.go_binary}")
    return document


def annotate_command(
    file: FileArgument,
    detail: Annotated[
        int | None,
        typer.Option("--detail", "-d", min=1, help="1 for -m, 2 or more for -m -m."),
    ] = None,
    allow: Annotated[
        list[str] | None,
        typer.Option("--allow", "-a", help="Message substring to keep (repeatable)."),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Directory where the upward configuration search starts."),
    ] = None,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")] = True,
    color: Annotated[bool, typer.Option("--color/--no-color", help="Toggle coloured output.")] = True,
) -> None:
    """Run escape analysis now and print the file with inline annotations."""

    logger = build_cli_logger(emoji=emoji, color=color)
    try:
        config = _load_settings(root or file.parent, detail=detail, allow=allow, emoji=emoji, color=color)
        document = run_annotate(file, config, logger=logger)
    except (ConfigError, CLIError) as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=getattr(exc, "exit_code", 1)) from exc

    _print_annotated(document, logger=logger)
    raise typer.Exit(code=0)


def resolve_command(file: FileArgument) -> None:
    """Print the package identifier the compiler is asked about for ``file``."""

    try:
        unit_id = resolve(file)
    except NoBackingFile as exc:  # pragma: no cover - typer guarantees a path
        raise typer.Exit(code=1) from exc
    typer.echo(unit_id)


__all__ = ["annotate_command", "resolve_command", "run_annotate"]
