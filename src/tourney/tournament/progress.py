"""Progress tracking over the streamed match-record output.

The results stream is persisted untouched while a line classifier counts the
match records that go past. Persistence and counting are separate objects:

* :class:`MatchRecordTracker` buffers text into lines, classifies them and
  reports progress;
* :class:`ProgressTrackingSink` forwards writes to the results file and feeds
  the tracker.
"""

from __future__ import annotations

import io
import string
from dataclasses import dataclass
from typing import List, TextIO

from rich.console import Console

REPORT_INTERVAL = 10
MIN_RECORD_FIELDS = 8


def is_match_record(line: str) -> bool:
    """True for a trimmed line that starts with a digit and has 8+ tab fields."""

    return (
        bool(line)
        and line[0] in string.digits
        and "\t" in line
        and len(line.split("\t")) >= MIN_RECORD_FIELDS
    )


class LineBuffer:
    """Accumulates text chunks and hands back completed lines."""

    def __init__(self) -> None:
        self._pending: List[str] = []

    def feed(self, chunk: str) -> List[str]:
        parts = chunk.split("\n")
        completed: List[str] = []
        for part in parts[:-1]:
            self._pending.append(part)
            completed.append("".join(self._pending))
            self._pending.clear()
        if parts[-1]:
            self._pending.append(parts[-1])
        return completed

    @property
    def pending(self) -> str:
        return "".join(self._pending)


@dataclass
class ProgressCounter:
    total: int
    completed: int = 0
    interval: int = REPORT_INTERVAL

    def advance(self) -> bool:
        """Count one game; return whether this count should be reported."""

        self.completed += 1
        return self.completed % self.interval == 0 or self.completed == self.total

    @property
    def percentage(self) -> float:
        return self.completed * 100.0 / self.total

    def render(self) -> str:
        return f"{self.completed}/{self.total} ({self.percentage:.2f}%)"


class ProgressReporter:
    """Writes progress lines to the operator stream and flushes immediately."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.console = Console(file=stream, markup=False, highlight=False, soft_wrap=True)

    def report(self, counter: ProgressCounter) -> None:
        self.console.print(counter.render())
        self.stream.flush()


class MatchRecordTracker:
    """Counts match records in a text stream that arrives in arbitrary chunks."""

    def __init__(self, total: int, reporter: ProgressReporter | None = None) -> None:
        self.counter = ProgressCounter(total=total)
        self.reporter = reporter
        self._lines = LineBuffer()

    @property
    def completed(self) -> int:
        return self.counter.completed

    @property
    def total(self) -> int:
        return self.counter.total

    def feed(self, chunk: str) -> int:
        """Ingest *chunk*; return how many match records it completed."""

        found = 0
        for line in self._lines.feed(chunk):
            if not is_match_record(line.strip()):
                continue
            found += 1
            if self.counter.advance() and self.reporter is not None:
                self.reporter.report(self.counter)
        return found


class ProgressTrackingSink(io.TextIOBase):
    """Text sink that persists everything to *delegate* and tracks progress.

    Each write reaches the delegate and is flushed before it is classified, so
    the results file is complete up to the last write even if the process dies.
    Closing the sink closes the delegate.
    """

    def __init__(self, delegate: TextIO, tracker: MatchRecordTracker) -> None:
        super().__init__()
        self._delegate = delegate
        self.tracker = tracker

    @property
    def completed(self) -> int:
        return self.tracker.completed

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed sink.")
        self._delegate.write(text)
        self._delegate.flush()
        self.tracker.feed(text)
        return len(text)

    def flush(self) -> None:
        if not self.closed:
            self._delegate.flush()

    def close(self) -> None:
        if self.closed:
            return
        try:
            super().close()
        finally:
            self._delegate.close()


__all__ = [
    "REPORT_INTERVAL",
    "MIN_RECORD_FIELDS",
    "LineBuffer",
    "MatchRecordTracker",
    "ProgressCounter",
    "ProgressReporter",
    "ProgressTrackingSink",
    "is_match_record",
]
