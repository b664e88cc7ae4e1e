"""tailrun - run a command behind a live tail of its output."""

from .errors import TailrunError
from .runner import Runner, run_command
from .types import ChildResult, OutputLine, RunOutcome, Stream

__version__ = "0.1.0"

__all__ = [
    "ChildResult",
    "OutputLine",
    "RunOutcome",
    "Runner",
    "Stream",
    "TailrunError",
    "run_command",
]
