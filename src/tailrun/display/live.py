"""Live terminal indicator: the tail window in a bordered box with a spinner."""

from __future__ import annotations

import time
from types import TracebackType

from loguru import logger
from rich import box
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text

from .state import blank_row

SPINNER_NAME = "line"


class TailBox:
    """Renderable box around the tail rows.

    The panel is rebuilt on every render, so the spinner frame follows the
    clock while the rows only change when ``rows`` is reassigned.
    """

    def __init__(self, title: str, width: int, rows: list[Text], spinner: Spinner | None = None) -> None:
        self.title = title
        self.width = width
        self.rows = rows
        self.spinner = spinner

    def __rich__(self) -> Panel:
        title = Text(self.title, style="bold")
        if self.spinner is not None:
            title = Text.assemble(title, " ", self.spinner.render(time.monotonic()))
        return Panel(
            Group(*self.rows),
            box=box.ROUNDED,
            title=title,
            title_align="left",
            width=self.width + 2,
            padding=(0, 0),
            border_style="dim",
        )


class LiveIndicator:
    """Owns the rich ``Live`` region for one run.

    Redraws happen on rich's refresh thread every ``tick_seconds``; ``update``
    only swaps the rows, so the refresh rate does not depend on how fast
    lines arrive. Leaving the ``with`` block always clears the region.
    """

    def __init__(
        self,
        console: Console,
        *,
        title: str,
        width: int,
        max_lines: int,
        tick_seconds: float,
    ) -> None:
        self._box = TailBox(
            title,
            width,
            [blank_row(width) for _ in range(max_lines)],
            Spinner(SPINNER_NAME, style="dim bold"),
        )
        self._live = Live(
            self._box,
            console=console,
            refresh_per_second=1 / tick_seconds,
            transient=True,
        )
        self._active = False

    def __enter__(self) -> LiveIndicator:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def refresh_per_second(self) -> float:
        return self._live.refresh_per_second

    @property
    def rows(self) -> list[Text]:
        return self._box.rows

    def start(self) -> None:
        self._live.start()
        self._active = True
        logger.debug("live.start")

    def update(self, rows: list[Text]) -> None:
        self._box.rows = rows

    def stop(self) -> None:
        if not self._active:
            return
        self._live.stop()
        self._active = False
        logger.debug("live.stop")
