"""Phased tournament execution.

``TournamentPipeline.run`` walks validate → load bundles → resolve agents →
prepare → run → finalize. Every phase that can produce agent or engine chatter
runs with stdout/stderr redirected into a log file under the tournament
folder, and the original streams are reinstated on every exit path.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Sequence, TextIO, Tuple

from rich.console import Console
from rich.markup import escape

from tourney.agents.resolver import AgentResolver
from tourney.agents.registry import AgentSourceRegistry
from tourney.domain.agents import AgentDescriptor, EngineContext
from tourney.domain.config import TournamentConfig, expected_match_count
from tourney.domain.errors import (
    AgentResolutionError,
    BundleLoadError,
    ConfigurationError,
    RunnerError,
    TournamentIOError,
)
from tourney.infrastructure.bundles import BundleLoader, load_agent_types
from tourney.infrastructure.config.validators import format_error, validate_config
from tourney.tournament.progress import MatchRecordTracker, ProgressReporter, ProgressTrackingSink
from tourney.tournament.round_robin import run_round_robin
from tourney.utils.diagnostics import DiscardingSink, redirect_output, redirect_to_file

RESULTS_FILE = "tournament.csv"
PROGRESS_FILE = "progress.log"
BUNDLE_LOG_FILE = "jar_loading.log"
AGENT_LOG_FILE = "ai_loading.log"
GAME_LOG_FILE = "game_logs.txt"
ERROR_LOG_FILE = "error_logs.txt"
TRACES_FOLDER = "traces"

MIB = 1024 * 1024
LOG_SIZE_WARNING_BYTES = 100 * MIB
LARGE_LOG_WARNING = "Log files are very large. Consider disabling game logs with 'saveGameLogs: false'."

TournamentRunner = Callable[..., None]


class Phase(str, Enum):
    VALIDATING = "validating"
    LOADING_BUNDLES = "loading_bundles"
    RESOLVING_AGENTS = "resolving_agents"
    PREPARING = "preparing"
    RUNNING = "running"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TournamentOutcome:
    """Artefacts and counters produced by a completed run."""

    tournament_folder: Path
    results_path: Path
    total_matches: int
    completed_matches: int
    agents: Tuple[str, ...]
    log_sizes: Mapping[str, int] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()


@dataclass
class _Session:
    results: ProgressTrackingSink
    progress: TextIO
    game_log: TextIO
    error_log: TextIO
    traces_folder: str | None


class TournamentPipeline:
    """Runs one tournament described by a validated-on-entry config."""

    def __init__(
        self,
        config: TournamentConfig,
        *,
        runner: TournamentRunner = run_round_robin,
        bundle_loader: BundleLoader = load_agent_types,
        engine_context: EngineContext | None = None,
        agent_sources: AgentSourceRegistry | None = None,
        resolver: AgentResolver | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.runner = runner
        self.bundle_loader = bundle_loader
        self.engine_context = engine_context or EngineContext()
        self.agent_sources = agent_sources if agent_sources is not None else AgentSourceRegistry()
        self.resolver = resolver or AgentResolver(self.agent_sources)
        self.console = console or Console()
        self.history: List[Phase] = []
        self._total = 0

    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase | None:
        return self.history[-1] if self.history else None

    @property
    def tournament_folder(self) -> Path:
        return Path(self.config.tournament_folder)

    def artifact(self, filename: str) -> Path:
        return self.tournament_folder / filename

    def run(self) -> TournamentOutcome:
        try:
            self._validate()
            if self.config.bot_folder is not None:
                self._load_bundles()
            roster = self._resolve_agents()
            outcome = self._play(roster)
        except Exception:
            self._enter(Phase.FAILED)
            raise
        self._enter(Phase.DONE)
        return outcome

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _validate(self) -> None:
        self._enter(Phase.VALIDATING)
        validate_config(self.config)
        if self.runner is run_round_robin and self.engine_context.play_game is None:
            raise ConfigurationError(
                format_error(
                    "<config>",
                    "engine",
                    "No game engine configured. Set 'engine' to a 'module:callable' entry point.",
                )
            )
        total = expected_match_count(self.config)
        if total <= 0:
            raise ConfigurationError(f"Tournament would play no games (total={total}).")
        self._total = total

    def _load_bundles(self) -> None:
        self._enter(Phase.LOADING_BUNDLES)
        folder = Path(self.config.bot_folder)
        if not folder.exists():
            raise BundleLoadError(f"Bot folder not found: {folder}")
        if not folder.is_dir():
            raise BundleLoadError(f"Bot path is not a directory: {folder}")

        self.console.print(f"Loading bot bundles from: {escape(str(folder))}")
        try:
            self._ensure_tournament_folder()
            with redirect_to_file(self.artifact(BUNDLE_LOG_FILE)):
                agent_types = list(self.bundle_loader(folder))
            self.agent_sources.populate(agent_types)
        except Exception as exc:
            raise BundleLoadError(f"Failed to load bot bundles from {folder}: {exc}") from exc
        self.console.print(f"Loaded {len(agent_types)} bot(s) from bundles")

    def _resolve_agents(self) -> List[AgentDescriptor]:
        self._enter(Phase.RESOLVING_AGENTS)
        names = self.config.agent_names
        self.console.print(f"\nMaps: {len(self.config.scenarios)}")
        for scenario in self.config.scenarios:
            self.console.print(f"  - {escape(scenario)}")
        self.console.print(f"\nLoading AIs: {len(names)}")
        try:
            self._ensure_tournament_folder()
            with redirect_to_file(self.artifact(AGENT_LOG_FILE)):
                roster = [self.resolver.resolve(name, self.engine_context) for name in names]
        except AgentResolutionError:
            raise
        except OSError as exc:
            raise TournamentIOError(f"Failed to open agent loading log in {self.tournament_folder}: {exc}") from exc

        for descriptor in roster:
            self.console.print(f"  Loaded: {escape(descriptor.name)} ({type(descriptor.agent).__name__})")
        return roster

    def _play(self, roster: Sequence[AgentDescriptor]) -> TournamentOutcome:
        self._enter(Phase.PREPARING)
        with ExitStack() as resources:
            session = self._prepare(resources)
            self.console.print(f"\nTotal games to play: {self._total}")
            self.console.print("\nStarting tournament...\n")

            self._enter(Phase.RUNNING)
            with redirect_output(session.game_log, session.error_log):
                self._invoke_runner(roster, session)
            self._enter(Phase.FINALIZING)
            completed = session.results.completed
        return self._finalize(roster, completed)

    def _prepare(self, resources: ExitStack) -> _Session:
        operator_stream = self.console.file
        tracker = MatchRecordTracker(self._total, ProgressReporter(operator_stream))
        try:
            self._ensure_tournament_folder()
            results_file = resources.enter_context(
                open(self.artifact(RESULTS_FILE), "w", encoding="utf-8", newline="")
            )
            results = resources.enter_context(ProgressTrackingSink(results_file, tracker))
            progress = resources.enter_context(open(self.artifact(PROGRESS_FILE), "w", encoding="utf-8"))
            if self.config.save_game_logs:
                game_log = resources.enter_context(open(self.artifact(GAME_LOG_FILE), "w", encoding="utf-8"))
                error_log = resources.enter_context(open(self.artifact(ERROR_LOG_FILE), "w", encoding="utf-8"))
            else:
                game_log = error_log = resources.enter_context(DiscardingSink())
            traces_folder = str(self.artifact(TRACES_FOLDER)) if self.config.save_traces else None
        except OSError as exc:
            raise TournamentIOError(f"Failed to prepare tournament output in {self.tournament_folder}: {exc}") from exc
        return _Session(
            results=results,
            progress=progress,
            game_log=game_log,
            error_log=error_log,
            traces_folder=traces_folder,
        )

    def _invoke_runner(self, roster: Sequence[AgentDescriptor], session: _Session) -> None:
        config = self.config
        try:
            self.runner(
                list(roster),
                list(config.scenarios),
                config.iterations,
                config.max_game_length,
                config.time_budget_ms,
                config.iteration_budget,
                config.pre_analysis_budget_ms,
                config.pre_analysis_budget_ms,
                config.full_observability,
                config.self_matches,
                config.timeout_check,
                config.collect_garbage,
                True,
                self.engine_context,
                session.traces_folder,
                session.results,
                session.progress,
                str(self.tournament_folder),
            )
        except RunnerError:
            raise
        except Exception as exc:
            raise RunnerError(f"Tournament runner failed: {exc}") from exc

    def _finalize(self, roster: Sequence[AgentDescriptor], completed: int) -> TournamentOutcome:
        results_path = self.artifact(RESULTS_FILE)
        self.console.print("\n" + "=" * 60)
        self.console.print("[green]Tournament completed successfully![/green]")
        self.console.print(f"Results saved to: {escape(str(results_path))}")

        log_sizes: Dict[str, int] = {}
        warnings: List[str] = []
        if self.config.save_game_logs:
            for filename in (GAME_LOG_FILE, ERROR_LOG_FILE):
                path = self.artifact(filename)
                size = path.stat().st_size if path.exists() else 0
                log_sizes[filename] = size
                if size >= MIB:
                    self.console.print(f"Log saved to: {escape(str(path))} ({size // MIB} MB)")
            if any(size > LOG_SIZE_WARNING_BYTES for size in log_sizes.values()):
                warnings.append(LARGE_LOG_WARNING)
                self.console.print(f"[yellow]WARNING: {LARGE_LOG_WARNING}[/yellow]")
        self.console.print("=" * 60)

        return TournamentOutcome(
            tournament_folder=self.tournament_folder,
            results_path=results_path,
            total_matches=self._total,
            completed_matches=completed,
            agents=tuple(descriptor.name for descriptor in roster),
            log_sizes=log_sizes,
            warnings=tuple(warnings),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _enter(self, phase: Phase) -> None:
        self.history.append(phase)

    def _ensure_tournament_folder(self) -> None:
        try:
            self.tournament_folder.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TournamentIOError(f"Failed to create tournament folder {self.tournament_folder}: {exc}") from exc


__all__ = [
    "Phase",
    "TournamentOutcome",
    "TournamentPipeline",
    "TournamentRunner",
    "RESULTS_FILE",
    "PROGRESS_FILE",
    "BUNDLE_LOG_FILE",
    "AGENT_LOG_FILE",
    "GAME_LOG_FILE",
    "ERROR_LOG_FILE",
    "TRACES_FOLDER",
    "LOG_SIZE_WARNING_BYTES",
    "LARGE_LOG_WARNING",
]
