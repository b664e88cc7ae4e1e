"""Command line entry point for tailrun."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich import get_console
from rich.markup import escape

from .config import get_settings
from .errors import SpawnError, TailrunError
from .logging_utils import configure_logging
from .runner import run_command
from .types import ChildResult

SPAWN_FAILED_EXIT_CODE = 127
CONFIG_ERROR_EXIT_CODE = 2
INTERNAL_ERROR_EXIT_CODE = 1
SIGNAL_EXIT_BASE = 128

app = typer.Typer(
    name="tailrun",
    help="Run a command behind a live tail of its output.",
    add_completion=False,
    rich_markup_mode="rich",
)


def exit_code_for(result: ChildResult) -> int:
    """Exit code that mirrors the child's own status."""
    if result.exit_code is not None:
        return result.exit_code
    return SIGNAL_EXIT_BASE + (result.signal or 0)


def _exit_with_error(message: str, code: int) -> typer.Exit:
    get_console().print(f"[bold red]Error:[/bold red] {escape(message)}")
    return typer.Exit(code)


@app.command(context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True})
def main(
    command: list[str] = typer.Argument(..., help="Command to run, followed by its arguments."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Label shown in the box title."),
    max_lines: Optional[int] = typer.Option(None, "--max-lines", "-k", min=1, help="Number of lines kept in the box."),
    tick_ms: Optional[int] = typer.Option(None, "--tick-ms", min=1, help="Redraw interval in milliseconds."),
    dump_dir: Optional[Path] = typer.Option(
        None, "--dump-dir", file_okay=False, help="Directory for the full output dump."
    ),
    tail_on_failure: Optional[bool] = typer.Option(
        None,
        "--tail-on-failure/--no-tail-on-failure",
        help="Print the last lines again when the command fails.",
    ),
) -> None:
    """Run COMMAND, showing the last lines of its output while it runs."""
    console = get_console()
    try:
        settings = get_settings(
            max_lines=max_lines,
            tick_ms=tick_ms,
            dump_dir=dump_dir,
            show_tail_on_failure=tail_on_failure,
        )
    except ValidationError as exc:
        raise _exit_with_error(f"invalid configuration: {exc}", CONFIG_ERROR_EXIT_CODE) from exc
    configure_logging(console, level=settings.log_level)

    try:
        outcome = run_command(command, name=name, settings=settings, console=console)
    except SpawnError as exc:
        raise _exit_with_error(str(exc), SPAWN_FAILED_EXIT_CODE) from exc
    except TailrunError as exc:
        raise _exit_with_error(str(exc), INTERNAL_ERROR_EXIT_CODE) from exc
    raise typer.Exit(exit_code_for(outcome.result))
