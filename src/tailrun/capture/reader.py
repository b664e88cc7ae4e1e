"""Line source reader for one child output stream."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import BinaryIO

from ..errors import CaptureIOError, DecodeError
from ..types import OutputLine, Stream

ENCODING = "utf-8"


def _strip_terminator(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def read_lines(source: BinaryIO, stream: Stream) -> Iterator[OutputLine]:
    """Yield the lines of ``source`` tagged with ``stream`` until end of file.

    Lines are split on ``\\n`` before decoding, so a multi-byte character can
    never be cut in half. A final line without a terminator is still yielded.

    Raises:
        DecodeError: a line is not valid UTF-8.
        CaptureIOError: the underlying read fails.
    """
    line_number = 0
    while True:
        try:
            raw = source.readline()
        except OSError as exc:
            raise CaptureIOError(stream, str(exc)) from exc
        if not raw:
            return
        line_number += 1
        try:
            text = _strip_terminator(raw).decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise DecodeError(stream, line_number, exc.reason) from exc
        yield OutputLine(text=text, stream=stream)


def pump_lines(source: BinaryIO, stream: Stream, sink: Callable[[OutputLine], None]) -> int:
    """Push every line of ``source`` into ``sink`` as soon as it is read."""
    count = 0
    for line in read_lines(source, stream):
        sink(line)
        count += 1
    return count
