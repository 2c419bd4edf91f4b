"""Validation helpers for tournament configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator, ValidationError
from rich.markup import escape

from tourney.domain.config import UNBOUNDED_ITERATION_BUDGET, TournamentConfig
from tourney.domain.errors import ConfigurationError

from .schema import load_schema

MIN_AGENTS = 2


def build_validator() -> Draft202012Validator:
    return Draft202012Validator(load_schema())


def format_error(path: Path | str, field: str, message: str) -> str:
    location = f"[cyan]{escape(str(path))}[/cyan]"
    target = f" → [magenta]{escape(field)}[/magenta]" if field else ""
    return f"[bold red]Config error[/bold red]: {location}{target} {escape(message)}"


def validate_with_schema(
    validator: Draft202012Validator,
    instance: Mapping[str, object],
    ref: str,
    path: Path | str,
) -> None:
    try:
        validator.evolve(schema={**validator.schema, "$ref": ref}).validate(instance)
    except ValidationError as exc:
        field = "/".join(str(part) for part in exc.path)
        field_display = field or "<root>"
        raise ConfigurationError(format_error(path, field_display, exc.message)) from exc


def validate_config(config: TournamentConfig, *, source: Path | str = "<config>") -> None:
    """Reject configurations that cannot produce a meaningful tournament.

    Checks run in a fixed order so the first reported problem is stable:
    scenarios, agents, numeric budgets, then scenario files on disk.
    """

    if not str(config.tournament_folder).strip():
        raise ConfigurationError(format_error(source, "tournamentFolder", "Tournament folder must not be empty."))

    if not config.scenarios:
        raise ConfigurationError(format_error(source, "maps", "At least 1 map is required."))

    if len(config.agent_names) < MIN_AGENTS:
        raise ConfigurationError(
            format_error(
                source,
                "ais",
                f"At least {MIN_AGENTS} AIs are required (found: {len(config.agent_names)}).",
            )
        )
    for index, name in enumerate(config.agent_names):
        if not name.strip():
            raise ConfigurationError(format_error(source, f"ais[{index}]", "Agent name must not be blank."))

    _require_positive(source, "iterations", config.iterations)
    _require_positive(source, "maxGameLength", config.max_game_length)
    _require_positive(source, "timeBudget", config.time_budget_ms)

    if config.iteration_budget != UNBOUNDED_ITERATION_BUDGET and config.iteration_budget <= 0:
        raise ConfigurationError(
            format_error(
                source,
                "iterationsBudget",
                f"iterationsBudget must be positive or -1 for unbounded (found: {config.iteration_budget}).",
            )
        )
    if config.pre_analysis_budget_ms < 0:
        raise ConfigurationError(
            format_error(
                source,
                "preAnalysisBudget",
                f"preAnalysisBudget must not be negative (found: {config.pre_analysis_budget_ms}).",
            )
        )

    for index, scenario in enumerate(config.scenarios):
        if not Path(scenario).exists():
            raise ConfigurationError(format_error(source, f"maps[{index}]", f"Map file not found: {scenario}"))


def _require_positive(source: Path | str, field: str, value: int) -> None:
    if value <= 0:
        raise ConfigurationError(format_error(source, field, f"{field} must be positive (found: {value})."))


__all__ = [
    "MIN_AGENTS",
    "build_validator",
    "format_error",
    "validate_with_schema",
    "validate_config",
]
