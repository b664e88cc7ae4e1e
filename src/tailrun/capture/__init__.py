"""Capture pipeline: per-stream readers and the stream merger."""

from .merger import StreamMerger, spawn_child
from .reader import pump_lines, read_lines

__all__ = [
    "StreamMerger",
    "pump_lines",
    "read_lines",
    "spawn_child",
]
