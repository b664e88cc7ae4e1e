"""Display state: the full output log and the tail window drawn from it."""

from __future__ import annotations

import unicodedata

from rich.console import Console
from rich.text import Text

from ..config import DEFAULT_MAX_LINES, Settings
from ..types import OutputLine, Stream

BORDER_COLUMNS = 2
STREAM_STYLES: dict[Stream, str] = {
    Stream.STDOUT: "dim cyan",
    Stream.STDERR: "dim yellow",
}


def render_width(console: Console, *, min_width: int = 1, fallback_columns: int = 80) -> int:
    """Inner width of the box for the console's current column count."""
    columns = console.width if console.width > 0 else fallback_columns
    return max(columns - BORDER_COLUMNS, min_width)


def _visible_part(text: str) -> str:
    # A carriage return rewinds the terminal line: only the last segment shows.
    visible = text.rsplit("\r", 1)[-1]
    return " ".join(visible.splitlines())


def _is_control(char: str) -> bool:
    return char != "\t" and unicodedata.category(char) == "Cc"


def _drop_controls(row: Text) -> Text:
    # Escape sequences are already decoded; whatever control bytes are left
    # (lone ESC, C0, DEL) must not reach the terminal.
    controls = [index for index, char in enumerate(row.plain) if _is_control(char)]
    if not controls:
        return row
    offsets = sorted({edge for index in controls for edge in (index, index + 1)})
    cleaned = row.blank_copy()
    for piece in row.divide(offsets):
        if len(piece.plain) == 1 and _is_control(piece.plain):
            continue
        cleaned.append_text(piece)
    return cleaned


def render_row(line: OutputLine, width: int) -> Text:
    """Render one line as exactly ``width`` terminal cells.

    ANSI colors from the child are kept, tabs are expanded, and the text is
    cropped on a cell boundary so wide characters are never split.
    """
    row = Text.from_ansi(
        _visible_part(line.text),
        style=STREAM_STYLES[line.stream],
        no_wrap=True,
        overflow="crop",
    )
    row = _drop_controls(row)
    row.expand_tabs()
    row.truncate(width, overflow="crop", pad=True)
    return row


def blank_row(width: int) -> Text:
    return Text(" " * width, no_wrap=True)


class DisplayState:
    """Append-only log of captured lines plus the last ``max_lines`` rendered.

    Attributes:
        width: Inner width of the box in terminal cells.
        max_lines: Height of the tail window.
        log: Every line received so far, in arrival order.
    """

    def __init__(self, width: int, max_lines: int = DEFAULT_MAX_LINES) -> None:
        if max_lines < 1:
            raise ValueError("max_lines must be at least 1")
        self.width = width
        self.max_lines = max_lines
        self.log: list[OutputLine] = []

    @classmethod
    def for_console(cls, console: Console, settings: Settings) -> DisplayState:
        width = render_width(console, min_width=settings.min_width, fallback_columns=settings.fallback_columns)
        return cls(width, settings.max_lines)

    def push(self, line: OutputLine) -> list[Text]:
        """Record ``line`` and return the freshly rendered tail window."""
        self.log.append(line)
        return self.rows()

    def tail(self) -> list[OutputLine]:
        return self.log[-self.max_lines :]

    def rows(self) -> list[Text]:
        rows = [render_row(line, self.width) for line in self.tail()]
        rows.extend(blank_row(self.width) for _ in range(self.max_lines - len(rows)))
        return rows
