"""Command line interface for tourney."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tourney.agents import BUILTIN_AGENTS, AgentSourceRegistry
from tourney.application.context import ApplicationContext
from tourney.config_loader import (
    ConfigurationError,
    TournamentConfig,
    config_from_arguments,
    expected_match_count,
    load_config_file,
    validate_config,
)
from tourney.domain.errors import TournamentError
from tourney.infrastructure.bundles import load_agent_types
from tourney.utils.diagnostics import DiscardingSink, redirect_output

app = typer.Typer(help="Run round-robin tournaments between pluggable agents across a set of maps.")
console = Console()


def _handle_error(exc: TournamentError) -> NoReturn:
    if isinstance(exc, ConfigurationError):
        console.print(str(exc))
    else:
        console.print(f"[bold red]Tournament failed:[/bold red] {escape(str(exc))}")
    raise typer.Exit(code=1) from exc


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)


def _config_option() -> Any:
    return typer.Option(
        ...,
        "--config",
        "-c",
        dir_okay=False,
        help="Tournament configuration file (JSON or YAML).",
    )


def _load_and_validate(config_file: Path) -> TournamentConfig:
    try:
        config = load_config_file(config_file)
        validate_config(config, source=config_file)
    except ConfigurationError as exc:
        _handle_error(exc)
    return config


@app.command()
def validate(config_file: Path = _config_option()) -> None:
    """Validate a tournament configuration file."""

    _load_and_validate(config_file)
    console.print("[green]Config OK[/green]")


@app.command()
def show(config_file: Path = _config_option()) -> None:
    """Display a tournament configuration and the number of games it plays."""

    _print_tournament_details(_load_and_validate(config_file))


def _print_tournament_details(config: TournamentConfig) -> None:
    table = Table(title="Tournament Configuration")
    table.add_column("Field", justify="left")
    table.add_column("Value", justify="left")
    table.add_row("Tournament folder", escape(str(config.tournament_folder)))
    table.add_row("Bot folder", escape(str(config.bot_folder)) if config.bot_folder else "none")
    table.add_row("Maps", escape(", ".join(config.scenarios)))
    table.add_row("AIs", escape(", ".join(config.agent_names)))
    table.add_row("Iterations per matchup", str(config.iterations))
    table.add_row("Max game length", f"{config.max_game_length} frames")
    table.add_row("Time budget", f"{config.time_budget_ms} ms")
    table.add_row("Iterations budget", str(config.iteration_budget))
    table.add_row("Pre-analysis budget", f"{config.pre_analysis_budget_ms} ms")
    table.add_row("Full observability", str(config.full_observability))
    table.add_row("Self matches", str(config.self_matches))
    table.add_row("Timeout check", str(config.timeout_check))
    table.add_row("Run GC", str(config.collect_garbage))
    table.add_row("Save traces", str(config.save_traces))
    table.add_row("Save game logs", str(config.save_game_logs))
    console.print(table)
    console.print(f"Total games to play: {expected_match_count(config)}")


@app.command()
def agents(
    bot_folder: Path | None = typer.Option(
        None,
        "--bot-folder",
        file_okay=False,
        dir_okay=True,
        help="Also list agents found in this folder of bot bundles.",
    ),
) -> None:
    """List the agent names that can be used in a tournament."""

    table = Table(title="Available Agents")
    table.add_column("Source", justify="left")
    table.add_column("Name", justify="left")

    if bot_folder is not None:
        sources = AgentSourceRegistry()
        try:
            with redirect_output(DiscardingSink()):
                sources.populate(load_agent_types(bot_folder))
        except TournamentError as exc:
            _handle_error(exc)
        for name in sources.names():
            table.add_row(escape(f"bundle:{bot_folder.name}"), name)

    for qualified in sorted(BUILTIN_AGENTS):
        namespace, _, name = qualified.rpartition(".")
        table.add_row(f"builtin:{namespace or '<root>'}", name)
    console.print(table)


@app.command("run")
def run_tournament(
    tournament_folder: Path | None = typer.Argument(None, help="Folder receiving tournament output."),
    maps: str | None = typer.Argument(None, help="Comma-separated map files."),
    ais: str | None = typer.Argument(None, help="Comma-separated agent names, e.g. 'RandomAgent,PassiveAgent'."),
    bot_folder: Path | None = typer.Argument(None, help="Optional folder of bot bundles."),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        dir_okay=False,
        help="Tournament configuration file; replaces the positional parameters.",
    ),
    iterations: int | None = typer.Option(None, "--iterations", help="Games per matchup and map."),
    max_game_length: int | None = typer.Option(None, "--max-game-length", help="Maximum game length in frames."),
    time_budget: int | None = typer.Option(None, "--time-budget", help="Per-move time budget in ms."),
    iterations_budget: int | None = typer.Option(
        None, "--iterations-budget", help="Per-move iteration budget, -1 for unbounded."
    ),
    pre_analysis_budget: int | None = typer.Option(None, "--pre-analysis-budget", help="Pre-analysis budget in ms."),
    self_matches: bool = typer.Option(False, "--self-matches", help="Let every agent also play itself."),
    partial_observability: bool = typer.Option(False, "--partial-observability", help="Hide the opponent's state."),
    no_timeout_check: bool = typer.Option(False, "--no-timeout-check", help="Do not enforce the time budget."),
    run_gc: bool = typer.Option(False, "--run-gc", help="Collect garbage between games."),
    save_traces: bool = typer.Option(False, "--save-traces", help="Write per-game traces."),
    no_game_logs: bool = typer.Option(False, "--no-game-logs", help="Discard game output instead of saving it."),
    runner: str | None = typer.Option(None, "--runner", help="Tournament runner as 'module:callable'."),
    engine: str | None = typer.Option(None, "--engine", help="Game engine as 'module:callable'."),
) -> None:
    """Run a full round-robin tournament."""

    positional = [value for value in (tournament_folder, maps, ais, bot_folder) if value is not None]
    if config_file is not None:
        if positional:
            _fail("Use either --config or positional parameters, not both.")
        try:
            config = load_config_file(config_file)
        except ConfigurationError as exc:
            _handle_error(exc)
    else:
        if tournament_folder is None or maps is None or ais is None:
            _fail("Specify --config FILE or TOURNAMENT_FOLDER MAPS AIS [BOT_FOLDER].")
        config = config_from_arguments(tournament_folder=tournament_folder, maps=maps, ais=ais, bot_folder=bot_folder)

    config = _apply_overrides(
        config,
        iterations=iterations,
        max_game_length=max_game_length,
        time_budget_ms=time_budget,
        iteration_budget=iterations_budget,
        pre_analysis_budget_ms=pre_analysis_budget,
        self_matches=True if self_matches else None,
        full_observability=False if partial_observability else None,
        timeout_check=False if no_timeout_check else None,
        collect_garbage=True if run_gc else None,
        save_traces=True if save_traces else None,
        save_game_logs=False if no_game_logs else None,
        runner=runner,
        engine=engine,
    )

    try:
        validate_config(config, source=config_file or "<command line>")
        app_context = ApplicationContext.create(config, console=console)
    except ConfigurationError as exc:
        _handle_error(exc)

    _print_tournament_details(config)

    try:
        outcome = app_context.build_pipeline(config).run()
    except TournamentError as exc:
        _handle_error(exc)

    console.print(f"Completed games: {outcome.completed_matches}/{outcome.total_matches}")


def _apply_overrides(config: TournamentConfig, **overrides: Any) -> TournamentConfig:
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def main(argv: Iterable[str] | None = None) -> None:
    """Invoke the Typer application."""
    app(args=list(argv) if argv is not None else None)


if __name__ == "__main__":
    main()
