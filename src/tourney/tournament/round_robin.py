"""Reference round-robin tournament runner.

Implements the tournament-runner interface the pipeline calls. The game itself
is played by the engine's ``play_game`` function carried on the
:class:`EngineContext`; this module only schedules games and writes records.
"""

from __future__ import annotations

import gc
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Sequence, Set, TextIO, Tuple

from tourney.domain.agents import AgentDescriptor, EngineContext
from tourney.domain.errors import RunnerError
from tourney.domain.match import RESULT_COLUMNS, GameOutcome, GameSpec, format_match_record


@dataclass(frozen=True)
class Pairing:
    """One scheduled game: iteration, scenario and the two seat indices."""

    iteration: int
    scenario: str
    first: int
    second: int


def schedule(
    agent_count: int,
    scenarios: Sequence[str],
    iterations: int,
    self_matches: bool,
) -> Iterator[Pairing]:
    """Yield games in play order: iteration, then scenario, then ordered pair."""

    for iteration in range(iterations):
        for scenario in scenarios:
            for first in range(agent_count):
                for second in range(agent_count):
                    if first == second and not self_matches:
                        continue
                    yield Pairing(iteration=iteration, scenario=scenario, first=first, second=second)


def run_round_robin(
    agents: Sequence[AgentDescriptor],
    scenarios: Sequence[str],
    iterations: int,
    max_game_length: int,
    time_budget_ms: int,
    iteration_budget: int,
    pre_analysis_budget_first: int,
    pre_analysis_budget_rest: int,
    full_observability: bool,
    self_matches: bool,
    timeout_check: bool,
    collect_garbage: bool,
    run_pre_analysis: bool,
    engine_context: EngineContext,
    traces_folder: str | None,
    results: TextIO,
    progress: TextIO,
    tournament_folder: str,
) -> None:
    """Play every scheduled game and stream one match record per game.

    The first game an ordered pair plays on a scenario gets
    ``pre_analysis_budget_first``; later ones get ``pre_analysis_budget_rest``.
    """

    if engine_context.play_game is None:
        raise RunnerError("No game engine configured. Set 'engine' to a 'module:callable' entry point.")

    trace_dir = Path(traces_folder) if traces_folder else None
    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)

    _write_header(results, agents, scenarios)
    progress.write(f"Tournament folder: {tournament_folder}\n")

    analysed: Set[Tuple[str, int, int]] = set()
    for game_number, pairing in enumerate(schedule(len(agents), scenarios, iterations, self_matches)):
        first = agents[pairing.first]
        second = agents[pairing.second]
        key = (pairing.scenario, pairing.first, pairing.second)
        budget = pre_analysis_budget_rest if key in analysed else pre_analysis_budget_first
        analysed.add(key)

        spec = GameSpec(
            iteration=pairing.iteration,
            scenario=pairing.scenario,
            player_one_name=first.name,
            player_one=_fresh(first.agent),
            player_two_name=second.name,
            player_two=_fresh(second.agent),
            max_game_length=max_game_length,
            time_budget_ms=time_budget_ms,
            iteration_budget=iteration_budget,
            pre_analysis_budget_ms=budget,
            run_pre_analysis=run_pre_analysis,
            full_observability=full_observability,
            timeout_check=timeout_check,
            record_trace=trace_dir is not None,
        )
        progress.write(f"MATCH UP: {first.name} vs {second.name} on {pairing.scenario} (iteration {pairing.iteration})\n")
        outcome = engine_context.play_game(spec, engine_context)
        if not isinstance(outcome, GameOutcome):
            raise RunnerError(f"Engine returned {type(outcome).__name__}, expected GameOutcome.")

        results.write(format_match_record(spec, outcome))
        progress.write(f"Winner: {outcome.winner} in {outcome.elapsed} frames\n")
        progress.flush()

        if trace_dir is not None and outcome.trace is not None:
            _write_trace(trace_dir / f"{game_number:05d}-{pairing.first}-{pairing.second}.json", spec, outcome)
        if collect_garbage:
            gc.collect()


def _fresh(agent: Any) -> Any:
    clone = getattr(agent, "clone", None)
    instance = clone() if callable(clone) else agent
    reset = getattr(instance, "reset", None)
    if callable(reset):
        reset()
    return instance


def _write_header(results: TextIO, agents: Sequence[AgentDescriptor], scenarios: Sequence[str]) -> None:
    lines: List[str] = ["RoundRobinTournament", "AIs"]
    lines.extend(f"\t{descriptor.name}" for descriptor in agents)
    lines.append("maps")
    lines.extend(f"\t{scenario}" for scenario in scenarios)
    lines.append("\t".join(RESULT_COLUMNS))
    results.write("\n".join(lines) + "\n")


def _write_trace(path: Path, spec: GameSpec, outcome: GameOutcome) -> None:
    payload = {
        "iteration": spec.iteration,
        "map": spec.scenario,
        "ai1": spec.player_one_name,
        "ai2": spec.player_two_name,
        "winner": outcome.winner,
        "time": outcome.elapsed,
        "trace": outcome.trace,
    }
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, default=str)


__all__ = ["Pairing", "run_round_robin", "schedule"]
