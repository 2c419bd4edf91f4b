"""Error taxonomy for tournament runs."""

from __future__ import annotations


class TournamentError(Exception):
    """Base class for failures that abort a tournament run."""


class ConfigurationError(TournamentError):
    """Raised when a tournament configuration is missing fields or out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class BundleLoadError(TournamentError):
    """Raised when external bot bundles cannot be loaded."""


class AgentResolutionError(TournamentError):
    """Raised when an agent name cannot be turned into a live agent."""

    def __init__(self, agent_name: str, reason: str) -> None:
        super().__init__(f"Failed to load agent '{agent_name}': {reason}")
        self.agent_name = agent_name
        self.reason = reason


class RunnerError(TournamentError):
    """Raised when the tournament runner fails."""


class TournamentIOError(TournamentError):
    """Raised when tournament folders or sinks cannot be created."""


__all__ = [
    "TournamentError",
    "ConfigurationError",
    "BundleLoadError",
    "AgentResolutionError",
    "RunnerError",
    "TournamentIOError",
]
