"""Concurrent draining of a child's stdout and stderr into one channel."""

from __future__ import annotations

import os
import queue
import subprocess
import threading
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import TracebackType
from typing import BinaryIO

from loguru import logger

from ..errors import CaptureIOError, DecodeError, SpawnError, StreamUnavailableError, TailrunError, WorkerFailureError
from ..types import OutputLine, Stream
from .reader import pump_lines

JOIN_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class _ReaderDone:
    stream: Stream
    error: TailrunError | None = None


def spawn_child(
    argv: Sequence[str],
    *,
    cwd: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.Popen[bytes]:
    """Start ``argv`` with both output streams piped and no stdin."""
    try:
        # The caller explicitly asks for this command to be run.
        process = subprocess.Popen(  # noqa: S603
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=env,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise SpawnError(f"failed to start {argv[0]!r}: {reason}") from exc
    logger.info("capture.spawn pid={} argv={}", process.pid, list(argv))
    return process


class StreamMerger:
    """Drain stdout and stderr of a running child on two reader threads.

    Both readers only ever put into one queue; the consuming thread iterates
    the merger to receive lines in arrival order. Lines of one stream keep
    their order, lines of different streams interleave as the OS delivers
    them.

    Use it as a context manager: leaving the block because of an exception
    kills the child if it is still running and reaps it.

    Example:
        >>> with StreamMerger(spawn_child(["ls"])) as merger:
        ...     for line in merger:
        ...         print(line.text)
        ...     returncode = merger.wait()
    """

    def __init__(self, process: subprocess.Popen[bytes]) -> None:
        self._process = process
        self._channel: queue.Queue[OutputLine | _ReaderDone] = queue.Queue()
        self._threads: dict[Stream, threading.Thread] = {}
        self._finished = False

    def __enter__(self) -> StreamMerger:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self._finished:
            self.abort()

    def __iter__(self) -> Iterator[OutputLine]:
        return self.lines()

    @property
    def pid(self) -> int:
        return self._process.pid

    def start(self) -> None:
        """Start one reader thread per stream.

        Raises:
            StreamUnavailableError: the child was not started with both streams piped.
        """
        sources: dict[Stream, BinaryIO | None] = {
            Stream.STDOUT: self._process.stdout,
            Stream.STDERR: self._process.stderr,
        }
        missing = [stream for stream, source in sources.items() if source is None]
        if missing:
            self.abort()
            raise StreamUnavailableError(missing[0])
        for stream, source in sources.items():
            thread = threading.Thread(
                target=self._pump,
                args=(source, stream),
                name=f"tailrun-{stream}",
                daemon=True,
            )
            thread.start()
            self._threads[stream] = thread

    def lines(self) -> Iterator[OutputLine]:
        """Yield merged lines until both readers are done.

        A reader failure is raised here, in the consuming thread, as soon as
        its completion message arrives.
        """
        pending = set(self._threads)
        while pending:
            item = self._channel.get()
            if isinstance(item, _ReaderDone):
                pending.discard(item.stream)
                if item.error is not None:
                    raise item.error
                continue
            yield item

    def wait(self) -> int:
        """Join both readers, then reap the child and return its return code."""
        for thread in self._threads.values():
            thread.join()
        returncode = self._process.wait()
        self._finished = True
        logger.info("capture.exit pid={} returncode={}", self._process.pid, returncode)
        return returncode

    def abort(self) -> None:
        """Kill the child if needed and release both pipes."""
        if self._process.poll() is None:
            logger.warning("capture.abort kill pid={}", self._process.pid)
            self._process.kill()
        self._process.wait()
        for source in (self._process.stdout, self._process.stderr):
            if source is not None and not self._threads:
                source.close()
        for stream, thread in self._threads.items():
            thread.join(JOIN_TIMEOUT_SECONDS)
            if thread.is_alive():
                logger.warning("capture.abort reader still running stream={}", stream)
        self._finished = True

    def _pump(self, source: BinaryIO, stream: Stream) -> None:
        error: TailrunError | None = None
        try:
            count = pump_lines(source, stream, self._channel.put)
            logger.debug("capture.reader.done stream={} lines={}", stream, count)
        except (DecodeError, CaptureIOError) as exc:
            error = exc
        except Exception as exc:
            logger.opt(exception=exc).error("capture.reader.crash stream={}", stream)
            error = WorkerFailureError(stream)
            error.__cause__ = exc
        finally:
            # Closing our end makes a child that keeps writing fail instead of block.
            source.close()
            self._channel.put(_ReaderDone(stream, error))
