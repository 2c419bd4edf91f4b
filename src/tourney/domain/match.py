"""Single-game request/outcome types and the match record line format."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

RESULT_COLUMNS: tuple[str, ...] = (
    "iteration",
    "map",
    "ai1",
    "ai2",
    "time",
    "winner",
    "crashed",
    "timedout",
)

DRAW = -1
NO_PLAYER = -1


@dataclass(frozen=True, kw_only=True)
class GameSpec:
    """Everything the engine needs to play one game."""

    iteration: int
    scenario: str
    player_one_name: str
    player_one: Any
    player_two_name: str
    player_two: Any
    max_game_length: int
    time_budget_ms: int
    iteration_budget: int
    pre_analysis_budget_ms: int
    run_pre_analysis: bool
    full_observability: bool
    timeout_check: bool
    record_trace: bool = False


@dataclass(frozen=True, kw_only=True)
class GameOutcome:
    """Result reported by the engine for one game.

    ``winner`` is 0 or 1 for the winning seat and -1 for a draw. ``crashed`` and
    ``timed_out`` name the offending seat, or -1 when nobody did.
    """

    winner: int = DRAW
    elapsed: int = 0
    crashed: int = NO_PLAYER
    timed_out: int = NO_PLAYER
    trace: Any = None


def format_match_record(spec: GameSpec, outcome: GameOutcome) -> str:
    """Render one tab-separated match record line, newline included."""

    fields = (
        spec.iteration,
        spec.scenario,
        spec.player_one_name,
        spec.player_two_name,
        outcome.elapsed,
        outcome.winner,
        outcome.crashed,
        outcome.timed_out,
    )
    return "\t".join(str(value) for value in fields) + "\n"


__all__ = [
    "RESULT_COLUMNS",
    "DRAW",
    "NO_PLAYER",
    "GameSpec",
    "GameOutcome",
    "format_match_record",
]
