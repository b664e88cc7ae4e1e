from __future__ import annotations

import io
from typing import BinaryIO

import pytest

from tailrun.capture.reader import pump_lines, read_lines
from tailrun.errors import CaptureIOError, DecodeError
from tailrun.types import OutputLine, Stream


def test_read_lines_keeps_order_and_tags() -> None:
    source = io.BytesIO(b"one\ntwo\nthree\n")

    lines = list(read_lines(source, Stream.STDERR))

    assert [line.text for line in lines] == ["one", "two", "three"]
    assert {line.stream for line in lines} == {Stream.STDERR}


def test_read_lines_yields_last_line_without_terminator() -> None:
    lines = list(read_lines(io.BytesIO(b"first\nlast"), Stream.STDOUT))

    assert [line.text for line in lines] == ["first", "last"]


def test_read_lines_strips_crlf_and_keeps_blank_lines() -> None:
    lines = list(read_lines(io.BytesIO(b"a\r\n\r\n\nb\n"), Stream.STDOUT))

    assert [line.text for line in lines] == ["a", "", "", "b"]


def test_read_lines_on_empty_stream_yields_nothing() -> None:
    assert list(read_lines(io.BytesIO(b""), Stream.STDOUT)) == []


def test_read_lines_decodes_multibyte_text() -> None:
    data = "héllo wörld\n日本語のテキスト\n".encode()

    lines = list(read_lines(io.BytesIO(data), Stream.STDOUT))

    assert [line.text for line in lines] == ["héllo wörld", "日本語のテキスト"]


def test_read_lines_raises_decode_error_with_line_number() -> None:
    source = io.BytesIO(b"fine\n\xff\xfe broken\nnever\n")
    reader = read_lines(source, Stream.STDERR)

    assert next(reader) == OutputLine("fine", Stream.STDERR)
    with pytest.raises(DecodeError) as excinfo:
        next(reader)

    assert excinfo.value.stream is Stream.STDERR
    assert excinfo.value.line_number == 2
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


class _BrokenSource(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def readline(self, size: int | None = -1) -> bytes:
        raise OSError("device went away")


def test_read_lines_wraps_os_errors() -> None:
    source: BinaryIO = _BrokenSource()  # type: ignore[assignment]

    with pytest.raises(CaptureIOError, match="device went away") as excinfo:
        list(read_lines(source, Stream.STDOUT))

    assert excinfo.value.stream is Stream.STDOUT


def test_pump_lines_pushes_each_line_and_counts() -> None:
    received: list[OutputLine] = []

    count = pump_lines(io.BytesIO(b"x\ny\n"), Stream.STDOUT, received.append)

    assert count == 2
    assert received == [OutputLine("x", Stream.STDOUT), OutputLine("y", Stream.STDOUT)]
