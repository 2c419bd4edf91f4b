"""tourney - round-robin tournaments between pluggable agents.

Agents are resolved by name from bot bundles and built-in namespaces, a phased
pipeline keeps agent and engine output out of the operator console, and a
streaming sink reports progress while match records are written.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .application import ApplicationContext, Phase, TournamentOutcome, TournamentPipeline
from .domain import (
    AgentDescriptor,
    AgentResolutionError,
    BundleLoadError,
    ConfigurationError,
    EngineContext,
    GameOutcome,
    GameSpec,
    RunnerError,
    TournamentConfig,
    TournamentError,
    TournamentIOError,
)

__all__ = [
    "__version__",
    "AgentDescriptor",
    "AgentResolutionError",
    "ApplicationContext",
    "BundleLoadError",
    "ConfigurationError",
    "EngineContext",
    "GameOutcome",
    "GameSpec",
    "Phase",
    "RunnerError",
    "TournamentConfig",
    "TournamentError",
    "TournamentIOError",
    "TournamentOutcome",
    "TournamentPipeline",
]
