"""Terminal display of the captured output."""

from .live import LiveIndicator, TailBox
from .state import DisplayState, blank_row, render_row, render_width

__all__ = [
    "DisplayState",
    "LiveIndicator",
    "TailBox",
    "blank_row",
    "render_row",
    "render_width",
]
