from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from tailrun.config import Settings


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(_env_file=None, dump_dir=tmp_path, tick_ms=50)
