"""Tournament scheduling and progress tracking."""

from __future__ import annotations

from .progress import (
    MatchRecordTracker,
    ProgressCounter,
    ProgressReporter,
    ProgressTrackingSink,
    is_match_record,
)
from .round_robin import Pairing, run_round_robin, schedule

__all__ = [
    "MatchRecordTracker",
    "Pairing",
    "ProgressCounter",
    "ProgressReporter",
    "ProgressTrackingSink",
    "is_match_record",
    "run_round_robin",
    "schedule",
]
