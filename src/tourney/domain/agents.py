"""Agent protocol and the handles shared between agents, resolver and runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from .config import agent_class_name

GameFn = Callable[..., Any]


@runtime_checkable
class Agent(Protocol):
    """Minimal interface every tournament competitor provides."""

    def reset(self) -> None:
        """Forget any state carried over from a previous game."""

    def get_action(self, player: int, state: Any) -> Any:
        """Return the action for *player* given the engine *state*."""


@dataclass(frozen=True)
class EngineContext:
    """Engine handle passed to agent constructors and to the tournament runner.

    ``play_game`` is the game engine entry point. The reference runner calls it
    with a ``GameSpec`` and the context itself and expects a ``GameOutcome``.
    """

    play_game: GameFn | None = None
    name: str = "default"
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AgentDescriptor:
    """A constructed agent bound to the name it was requested under."""

    name: str
    agent: Any

    @property
    def class_name(self) -> str:
        return agent_class_name(self.name)


__all__ = ["Agent", "AgentDescriptor", "EngineContext", "GameFn"]
