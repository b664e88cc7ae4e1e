from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tailrun.config import DEFAULT_MAX_LINES, DEFAULT_TICK_MS, Settings, get_settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.max_lines == DEFAULT_MAX_LINES == 4
    assert settings.tick_ms == DEFAULT_TICK_MS == 200
    assert settings.tick_seconds == pytest.approx(0.2)
    assert settings.dump_dir is None
    assert settings.show_tail_on_failure is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TAILRUN_MAX_LINES", "7")
    monkeypatch.setenv("TAILRUN_DUMP_DIR", str(tmp_path))

    settings = Settings(_env_file=None)

    assert settings.max_lines == 7
    assert settings.dump_dir == tmp_path


def test_get_settings_ignores_unset_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(Path(__file__).parent)
    monkeypatch.setenv("TAILRUN_TICK_MS", "500")

    settings = get_settings(tick_ms=None, max_lines=9)

    assert settings.tick_ms == 500
    assert settings.max_lines == 9


@pytest.mark.parametrize("field", ["max_lines", "tick_ms"])
def test_rejects_non_positive_values(field: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})


def test_log_level_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAILRUN_LOG_LEVEL", "debug")

    assert Settings(_env_file=None).log_level == "DEBUG"


def test_rejects_unknown_log_level() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="bogus")
