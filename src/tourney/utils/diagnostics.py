"""Scoped redirection of the process-wide ``sys.stdout``/``sys.stderr`` pair.

This module is the only place the interpreter's standard streams are swapped.
Redirections are meant to be used one after another, not concurrently.
"""

from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO


class DiscardingSink(io.TextIOBase):
    """Writable text sink that drops everything written to it."""

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed sink.")
        return len(text)


def is_file_backed(stream: TextIO) -> bool:
    return isinstance(stream, io.TextIOWrapper) and stream not in (sys.__stdout__, sys.__stderr__)


@contextmanager
def redirect_output(destination: TextIO, error_destination: TextIO | None = None) -> Iterator[TextIO]:
    """Send stdout and stderr to *destination* for the duration of the block.

    ``error_destination`` routes stderr separately when given. On exit the
    exact stream objects that were active on entry are reinstated and
    file-backed destinations are closed.
    """

    previous_out, previous_err = sys.stdout, sys.stderr
    sys.stdout = destination
    sys.stderr = error_destination if error_destination is not None else destination
    try:
        yield destination
    finally:
        sys.stdout, sys.stderr = previous_out, previous_err
        for stream in _distinct(destination, error_destination):
            if is_file_backed(stream):
                stream.close()
            elif not stream.closed:
                stream.flush()


@contextmanager
def redirect_to_file(path: Path) -> Iterator[TextIO]:
    """Open *path* for writing and redirect both streams into it."""

    log = open(path, "w", encoding="utf-8")
    with redirect_output(log) as stream:
        yield stream


def _distinct(*streams: TextIO | None) -> list[TextIO]:
    seen: list[TextIO] = []
    for stream in streams:
        if stream is not None and all(stream is not other for other in seen):
            seen.append(stream)
    return seen


__all__ = ["DiscardingSink", "is_file_backed", "redirect_output", "redirect_to_file"]
