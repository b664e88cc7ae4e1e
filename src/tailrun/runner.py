"""Runner: spawn the command, drive the live tail, then report and dump."""

from __future__ import annotations

import os
import time
from collections.abc import Mapping, Sequence

from loguru import logger
from rich import get_console
from rich.console import Console
from rich.markup import escape

from .capture import StreamMerger, spawn_child
from .config import Settings, get_settings
from .display import DisplayState, LiveIndicator, TailBox
from .dump import dump_lines
from .errors import InvalidCommandError, TailrunError
from .types import ChildResult, RunOutcome, RunPhase


def build_command(tokens: Sequence[str | os.PathLike[str]]) -> list[str]:
    """Turn the caller's tokens into an argv list, executable first."""
    if not tokens:
        raise InvalidCommandError("command must contain at least one token")
    return [os.fspath(token) for token in tokens]


class Runner:
    """Runs one command behind a live tail window.

    ``phase`` walks ``IDLE -> STARTED -> DRAINING -> FINALIZING -> DONE``.
    A fatal error leaves it at the phase where the run stopped.
    """

    def __init__(
        self,
        tokens: Sequence[str | os.PathLike[str]],
        *,
        name: str | None = None,
        settings: Settings | None = None,
        console: Console | None = None,
        cwd: str | os.PathLike[str] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.argv = build_command(tokens)
        self.name = name
        self.settings = settings or get_settings()
        self.console = console or get_console()
        self.cwd = cwd
        self.env = env
        self.phase = RunPhase.IDLE

    @property
    def title(self) -> str:
        return f"Running {self.name}" if self.name else "Running"

    def run(self) -> RunOutcome:
        if self.phase is not RunPhase.IDLE:
            raise RuntimeError("a Runner can only be run once")
        started_at = time.monotonic()
        process = spawn_child(self.argv, cwd=self.cwd, env=self.env)
        self.phase = RunPhase.STARTED
        state = DisplayState.for_console(self.console, self.settings)
        try:
            returncode = self._drain(StreamMerger(process), state)
        except TailrunError as exc:
            logger.info("run.abort phase={} argv={} error={}", self.phase, self.argv, exc)
            raise

        self.phase = RunPhase.FINALIZING
        result = ChildResult.from_returncode(returncode)
        duration = time.monotonic() - started_at
        if not result.succeeded and self.settings.show_tail_on_failure and state.log:
            self.console.print(TailBox(self.title, state.width, state.rows()))
        log_path = dump_lines(state.log, directory=self.settings.dump_dir, prefix=self.settings.dump_prefix)
        self._report(result, duration, log_path)
        self.phase = RunPhase.DONE
        return RunOutcome(result=result, log_path=log_path, line_count=len(state.log), duration=duration)

    def _drain(self, merger: StreamMerger, state: DisplayState) -> int:
        indicator = LiveIndicator(
            self.console,
            title=self.title,
            width=state.width,
            max_lines=state.max_lines,
            tick_seconds=self.settings.tick_seconds,
        )
        with merger, indicator:
            self.phase = RunPhase.DRAINING
            for line in merger:
                indicator.update(state.push(line))
            return merger.wait()

    def _report(self, result: ChildResult, duration: float, log_path: os.PathLike[str]) -> None:
        elapsed = f"[dim]({duration:.1f}s)[/dim]"
        if result.succeeded:
            self.console.print(f"[bold green]Success![/bold green] {elapsed}")
        else:
            self.console.print(f"[bold red]Error:[/bold red] {result.describe()} {elapsed}")
        self.console.print(f"[dim]Output saved to[/dim] {escape(os.fspath(log_path))}")


def run_command(
    tokens: Sequence[str | os.PathLike[str]],
    *,
    name: str | None = None,
    settings: Settings | None = None,
    console: Console | None = None,
    cwd: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> RunOutcome:
    """Run ``tokens`` as a child process behind a live tail of its output.

    Args:
        tokens: Executable followed by its arguments.
        name: Optional label shown in the box title.
        settings: Settings to use; loaded from the environment when omitted.
        console: Console to draw on; the global rich console when omitted.
        cwd: Working directory of the child.
        env: Environment of the child; inherited when omitted.

    Returns:
        The child's result and the path of the output dump. A failing child
        is a normal outcome, check ``RunOutcome.succeeded``.

    Raises:
        InvalidCommandError: ``tokens`` is empty.
        SpawnError: the child could not be started.
        StreamUnavailableError, DecodeError, CaptureIOError, WorkerFailureError:
            capturing the output failed; the child has been killed.
        DumpError: the output dump could not be written.
    """
    runner = Runner(tokens, name=name, settings=settings, console=console, cwd=cwd, env=env)
    return runner.run()
