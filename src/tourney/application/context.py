"""Application-wide context for dependency resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from rich.console import Console

from tourney.domain.agents import EngineContext
from tourney.domain.config import TournamentConfig
from tourney.infrastructure.bundles import BundleLoader, load_agent_types
from tourney.tournament.round_robin import run_round_robin
from tourney.utils.entry_points import load_callable

from .pipeline import TournamentPipeline, TournamentRunner


def create_engine_context(engine_spec: str | None, options: Mapping[str, Any] | None = None) -> EngineContext:
    """Build the engine handle shared by agent constructors and the runner."""

    if not engine_spec:
        return EngineContext(options=dict(options or {}))
    return EngineContext(play_game=load_callable(engine_spec), name=engine_spec, options=dict(options or {}))


@dataclass
class ApplicationContext:
    """Simple container that wires the pipeline's collaborators."""

    console: Console
    runner: TournamentRunner = run_round_robin
    bundle_loader: BundleLoader = load_agent_types
    engine_context: EngineContext = field(default_factory=EngineContext)

    @classmethod
    def create(cls, config: TournamentConfig, console: Optional[Console] = None) -> ApplicationContext:
        console = console or Console()
        runner = load_callable(config.runner) if config.runner else run_round_robin
        return cls(
            console=console,
            runner=runner,
            engine_context=create_engine_context(config.engine),
        )

    def build_pipeline(self, config: TournamentConfig) -> TournamentPipeline:
        return TournamentPipeline(
            config,
            runner=self.runner,
            bundle_loader=self.bundle_loader,
            engine_context=self.engine_context,
            console=self.console,
        )


__all__ = ["ApplicationContext", "create_engine_context"]
