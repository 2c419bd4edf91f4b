"""Tests for the progress-tracking results sink."""

from __future__ import annotations

import io

import pytest

from tourney.tournament.progress import (
    LineBuffer,
    MatchRecordTracker,
    ProgressCounter,
    ProgressReporter,
    ProgressTrackingSink,
    is_match_record,
)

RECORD = "0\tmaps/8x8.xml\tRandomAgent\tPassiveAgent\t120\t0\t-1\t-1\n"


def _sink(total: int) -> tuple[ProgressTrackingSink, io.StringIO, io.StringIO]:
    delegate = io.StringIO()
    console = io.StringIO()
    sink = ProgressTrackingSink(delegate, MatchRecordTracker(total, ProgressReporter(console)))
    return sink, delegate, console


def test_is_match_record_classification() -> None:
    assert is_match_record(RECORD.strip())
    assert is_match_record("3\ta\tb\tc\td\te\tf\tg\textra")
    assert not is_match_record("")
    assert not is_match_record("iteration\tmap\tai1\tai2\ttime\twinner\tcrashed\ttimedout")
    assert not is_match_record("1\tonly\tseven\tfields\there\tand\tthere")
    assert not is_match_record("12345")


def test_record_split_across_writes_is_counted_once() -> None:
    sink, delegate, _ = _sink(total=10)
    text = RECORD * 3
    for start in range(0, len(text), 7):
        sink.write(text[start : start + 7])
    assert sink.completed == 3
    assert delegate.getvalue() == text


def test_non_record_lines_pass_through_uncounted() -> None:
    sink, delegate, console = _sink(total=10)
    header = "RoundRobinTournament\nAIs\n\tRandomAgent\nmaps\n\tmaps/8x8.xml\n"
    sink.write(header)
    sink.write("iteration\tmap\tai1\tai2\ttime\twinner\tcrashed\ttimedout\n")
    assert sink.completed == 0
    assert delegate.getvalue().startswith(header)
    assert console.getvalue() == ""


def test_surrounding_whitespace_is_trimmed_before_classification() -> None:
    sink, _, _ = _sink(total=10)
    sink.write("  " + RECORD.replace("\n", "\r\n"))
    assert sink.completed == 1


def test_incomplete_line_waits_for_newline() -> None:
    sink, _, _ = _sink(total=10)
    sink.write(RECORD.rstrip("\n"))
    assert sink.completed == 0
    sink.write("\n")
    assert sink.completed == 1


def test_progress_reported_at_intervals_and_at_total() -> None:
    sink, _, console = _sink(total=25)
    for _ in range(25):
        sink.write(RECORD)
    assert console.getvalue().splitlines() == [
        "10/25 (40.00%)",
        "20/25 (80.00%)",
        "25/25 (100.00%)",
    ]


def test_final_report_for_small_tournament() -> None:
    sink, _, console = _sink(total=6)
    sink.write(RECORD * 6)
    assert sink.completed == 6
    assert console.getvalue().splitlines() == ["6/6 (100.00%)"]


def test_forwarding_failure_propagates() -> None:
    class BrokenFile(io.StringIO):
        def write(self, text: str) -> int:
            raise OSError("disk full")

    sink = ProgressTrackingSink(BrokenFile(), MatchRecordTracker(5))
    with pytest.raises(OSError, match="disk full"):
        sink.write(RECORD)
    assert sink.completed == 0


def test_close_closes_delegate() -> None:
    sink, delegate, _ = _sink(total=1)
    sink.write(RECORD)
    sink.close()
    assert delegate.closed
    with pytest.raises(ValueError):
        sink.write(RECORD)


def test_line_buffer_keeps_partial_tail() -> None:
    buffer = LineBuffer()
    assert buffer.feed("a\nb") == ["a"]
    assert buffer.pending == "b"
    assert buffer.feed("c\n\n") == ["bc", ""]
    assert buffer.pending == ""


def test_counter_percentage_format() -> None:
    counter = ProgressCounter(total=3)
    counter.advance()
    assert counter.render() == "1/3 (33.33%)"
