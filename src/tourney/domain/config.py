"""Domain model describing a tournament request."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

DEFAULT_ITERATIONS = 5
DEFAULT_MAX_GAME_LENGTH = 3000
DEFAULT_TIME_BUDGET_MS = 100
UNBOUNDED_ITERATION_BUDGET = -1
DEFAULT_PRE_ANALYSIS_BUDGET_MS = 1000


@dataclass(frozen=True, kw_only=True)
class TournamentConfig:
    tournament_folder: Path
    scenarios: tuple[str, ...]
    agent_names: tuple[str, ...]
    bot_folder: Path | None = None
    iterations: int = DEFAULT_ITERATIONS
    max_game_length: int = DEFAULT_MAX_GAME_LENGTH
    time_budget_ms: int = DEFAULT_TIME_BUDGET_MS
    iteration_budget: int = UNBOUNDED_ITERATION_BUDGET
    pre_analysis_budget_ms: int = DEFAULT_PRE_ANALYSIS_BUDGET_MS
    full_observability: bool = True
    self_matches: bool = False
    timeout_check: bool = True
    collect_garbage: bool = False
    save_traces: bool = False
    save_game_logs: bool = True
    runner: str | None = None
    engine: str | None = None

    @property
    def matchups(self) -> int:
        """Number of ordered agent pairings played on each scenario per iteration."""

        n = len(self.agent_names)
        return n * n if self.self_matches else n * (n - 1)


def expected_match_count(config: TournamentConfig) -> int:
    """Total number of games a full round robin over *config* plays."""

    return config.iterations * len(config.scenarios) * config.matchups


def agent_class_name(name: str) -> str:
    """Strip a trailing ``(param)`` suffix from an agent name."""

    return name.split("(", 1)[0]


__all__ = [
    "ConfigurationError",
    "TournamentConfig",
    "expected_match_count",
    "agent_class_name",
    "DEFAULT_ITERATIONS",
    "DEFAULT_MAX_GAME_LENGTH",
    "DEFAULT_TIME_BUDGET_MS",
    "UNBOUNDED_ITERATION_BUDGET",
    "DEFAULT_PRE_ANALYSIS_BUDGET_MS",
]
