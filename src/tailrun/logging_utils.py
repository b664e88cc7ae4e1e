"""Runtime logging helpers."""

from __future__ import annotations

import os

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def _build_handler(console: Console) -> RichHandler:
    return RichHandler(
        console=console,
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(console: Console, *, level: str | None = None) -> None:
    """Configure process-level logging once.

    Records go through the same console as the live box, so they are printed
    above it instead of tearing it apart.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = (level or os.getenv("TAILRUN_LOG_LEVEL", "WARNING")).upper()
    logger.remove()
    logger.add(
        _build_handler(console),
        level=resolved,
        format="{message}",
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED = True
