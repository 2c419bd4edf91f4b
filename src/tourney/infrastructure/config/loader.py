"""Config loading from JSON/YAML files and from positional command-line input."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from tourney.domain.config import (
    DEFAULT_ITERATIONS,
    DEFAULT_MAX_GAME_LENGTH,
    DEFAULT_PRE_ANALYSIS_BUDGET_MS,
    DEFAULT_TIME_BUDGET_MS,
    UNBOUNDED_ITERATION_BUDGET,
    TournamentConfig,
)
from tourney.domain.errors import ConfigurationError

from .schema import TOURNAMENT_REF
from .validators import build_validator, format_error, validate_with_schema

__all__ = ["load_config_file", "config_from_mapping", "config_from_arguments", "split_list"]


def _read_document(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigurationError(format_error(path, "<file>", "Configuration file not found."))
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem error propagation
        raise ConfigurationError(format_error(path, "<file>", str(exc))) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(format_error(path, "<root>", f"Invalid JSON/YAML: {exc}")) from exc
    if data is None:
        raise ConfigurationError(format_error(path, "<root>", "Configuration file is empty."))
    if not isinstance(data, Mapping):
        raise ConfigurationError(format_error(path, "<root>", "Top-level document must be a mapping."))
    return data


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value))


def config_from_mapping(data: Mapping[str, Any]) -> TournamentConfig:
    """Build a config from an already schema-validated mapping."""

    return TournamentConfig(
        tournament_folder=Path(str(data["tournamentFolder"])),
        # botJarsFolder is the older spelling of botFolder
        bot_folder=_optional_path(data.get("botFolder", data.get("botJarsFolder"))),
        scenarios=tuple(str(item) for item in data["maps"]),
        agent_names=tuple(str(item) for item in data["ais"]),
        iterations=int(data["iterations"]),
        max_game_length=int(data["maxGameLength"]),
        time_budget_ms=int(data["timeBudget"]),
        iteration_budget=int(data["iterationsBudget"]),
        pre_analysis_budget_ms=int(data["preAnalysisBudget"]),
        full_observability=bool(data["fullObservability"]),
        self_matches=bool(data["selfMatches"]),
        timeout_check=bool(data["timeoutCheck"]),
        collect_garbage=bool(data["runGC"]),
        save_traces=bool(data["saveTraces"]),
        save_game_logs=bool(data.get("saveGameLogs", True)),
        runner=data.get("runner"),
        engine=data.get("engine"),
    )


def load_config_file(path: Path) -> TournamentConfig:
    """Read and schema-validate a tournament configuration file."""

    data = _read_document(path)
    validate_with_schema(build_validator(), data, TOURNAMENT_REF, path)
    return config_from_mapping(data)


def split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated list, trimming entries and dropping empty ones."""

    return tuple(item.strip() for item in value.split(",") if item.strip())


def config_from_arguments(
    *,
    tournament_folder: Path,
    maps: str | Iterable[str],
    ais: str | Iterable[str],
    bot_folder: Path | None = None,
    iterations: int | None = None,
    max_game_length: int | None = None,
    time_budget_ms: int | None = None,
    iteration_budget: int | None = None,
    pre_analysis_budget_ms: int | None = None,
    full_observability: bool = True,
    self_matches: bool = False,
    timeout_check: bool = True,
    collect_garbage: bool = False,
    save_traces: bool = False,
    save_game_logs: bool = True,
    runner: str | None = None,
    engine: str | None = None,
) -> TournamentConfig:
    """Build a config from positional-mode parameters, filling in defaults."""

    scenarios = split_list(maps) if isinstance(maps, str) else tuple(maps)
    agent_names = split_list(ais) if isinstance(ais, str) else tuple(ais)
    return TournamentConfig(
        tournament_folder=Path(tournament_folder),
        bot_folder=bot_folder,
        scenarios=scenarios,
        agent_names=agent_names,
        iterations=DEFAULT_ITERATIONS if iterations is None else iterations,
        max_game_length=DEFAULT_MAX_GAME_LENGTH if max_game_length is None else max_game_length,
        time_budget_ms=DEFAULT_TIME_BUDGET_MS if time_budget_ms is None else time_budget_ms,
        iteration_budget=UNBOUNDED_ITERATION_BUDGET if iteration_budget is None else iteration_budget,
        pre_analysis_budget_ms=(
            DEFAULT_PRE_ANALYSIS_BUDGET_MS if pre_analysis_budget_ms is None else pre_analysis_budget_ms
        ),
        full_observability=full_observability,
        self_matches=self_matches,
        timeout_check=timeout_check,
        collect_garbage=collect_garbage,
        save_traces=save_traces,
        save_game_logs=save_game_logs,
        runner=runner,
        engine=engine,
    )
