"""Data types shared by the capture pipeline and the display."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Stream(StrEnum):
    """Origin of a captured line."""

    STDOUT = "stdout"
    STDERR = "stderr"


class RunPhase(StrEnum):
    IDLE = "idle"
    STARTED = "started"
    DRAINING = "draining"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass(frozen=True)
class OutputLine:
    """One decoded line of child output, without its line terminator."""

    text: str
    stream: Stream


@dataclass(frozen=True)
class ChildResult:
    """Terminal status of the child process."""

    exit_code: int | None
    signal: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @classmethod
    def from_returncode(cls, returncode: int) -> ChildResult:
        # Popen reports death by signal N as -N.
        if returncode < 0:
            return cls(exit_code=None, signal=-returncode)
        return cls(exit_code=returncode)

    def describe(self) -> str:
        if self.signal is not None:
            return f"terminated by signal {self.signal}"
        return f"exit code {self.exit_code}"


@dataclass(frozen=True)
class RunOutcome:
    """Value handed back to the caller once a run is done."""

    result: ChildResult
    log_path: Path
    line_count: int = 0
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.result.succeeded

    @property
    def exit_code(self) -> int | None:
        return self.result.exit_code
