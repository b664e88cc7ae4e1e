"""Application-level exception types for tailrun."""

from __future__ import annotations

from .types import Stream


class TailrunError(Exception):
    """Base exception for tailrun."""


class InvalidCommandError(TailrunError):
    """Raised when the command token list is empty."""


class SpawnError(TailrunError):
    """Raised when the child process cannot be created."""


class StreamUnavailableError(TailrunError):
    """Raised when a piped stream is missing from the child handle."""

    def __init__(self, stream: Stream) -> None:
        super().__init__(f"couldn't get {stream} of the child process")
        self.stream = stream


class DecodeError(TailrunError):
    """Raised when a line of child output is not valid text."""

    def __init__(self, stream: Stream, line_number: int, reason: str) -> None:
        super().__init__(f"invalid text on {stream} line {line_number}: {reason}")
        self.stream = stream
        self.line_number = line_number


class RunIOError(TailrunError):
    """Base exception for read and write failures during a run."""


class CaptureIOError(RunIOError):
    """Raised when reading a child stream fails."""

    def __init__(self, stream: Stream, reason: str) -> None:
        super().__init__(f"failed to read {stream}: {reason}")
        self.stream = stream


class DumpError(RunIOError):
    """Raised when the output dump cannot be written."""


class WorkerFailureError(TailrunError):
    """Raised when a reader thread dies with an unexpected exception."""

    def __init__(self, stream: Stream) -> None:
        super().__init__(f"thread crashed while reading {stream}")
        self.stream = stream
