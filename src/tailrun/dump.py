"""Dump of the full captured output to a temporary file."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from .errors import DumpError
from .types import OutputLine

DUMP_SUFFIX = ".log"


def dump_lines(
    lines: Iterable[OutputLine],
    *,
    directory: str | os.PathLike[str] | None = None,
    prefix: str = "tailrun-",
) -> Path:
    """Write one line per entry to a new temp file and return its path.

    The stream tag is dropped. The file is kept on disk for later inspection.
    """
    try:
        handle = tempfile.NamedTemporaryFile(  # noqa: SIM115
            "w",
            encoding="utf-8",
            newline="\n",
            prefix=prefix,
            suffix=DUMP_SUFFIX,
            dir=directory,
            delete=False,
        )
    except OSError as exc:
        raise DumpError(f"failed to create output dump: {exc}") from exc

    path = Path(handle.name)
    count = 0
    try:
        with handle:
            for line in lines:
                handle.write(f"{line.text}\n")
                count += 1
    except OSError as exc:
        path.unlink(missing_ok=True)
        raise DumpError(f"failed to write output dump {path}: {exc}") from exc
    logger.info("dump.written path={} lines={}", path, count)
    return path
