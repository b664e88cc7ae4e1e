from __future__ import annotations

from pathlib import Path

from tailrun.types import ChildResult, RunOutcome


def test_child_result_from_exit_code() -> None:
    result = ChildResult.from_returncode(0)

    assert result.succeeded
    assert result.signal is None
    assert result.describe() == "exit code 0"


def test_child_result_from_signal() -> None:
    result = ChildResult.from_returncode(-9)

    assert not result.succeeded
    assert result.exit_code is None
    assert result.signal == 9
    assert result.describe() == "terminated by signal 9"


def test_run_outcome_delegates_to_result() -> None:
    outcome = RunOutcome(result=ChildResult(exit_code=3), log_path=Path("out.log"))

    assert outcome.succeeded is False
    assert outcome.exit_code == 3
