"""Domain types shared across the tournament engine."""

from __future__ import annotations

from .agents import Agent, AgentDescriptor, EngineContext
from .config import TournamentConfig, agent_class_name, expected_match_count
from .errors import (
    AgentResolutionError,
    BundleLoadError,
    ConfigurationError,
    RunnerError,
    TournamentError,
    TournamentIOError,
)
from .match import GameOutcome, GameSpec, format_match_record

__all__ = [
    "Agent",
    "AgentDescriptor",
    "EngineContext",
    "TournamentConfig",
    "agent_class_name",
    "expected_match_count",
    "TournamentError",
    "ConfigurationError",
    "BundleLoadError",
    "AgentResolutionError",
    "RunnerError",
    "TournamentIOError",
    "GameSpec",
    "GameOutcome",
    "format_match_record",
]
