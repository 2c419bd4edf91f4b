"""Convenience base class for agents shipped in bundles or built in."""

from __future__ import annotations

import copy
from typing import Any

from tourney.domain.agents import EngineContext


class BaseAgent:
    """Stores the engine context and provides no-op lifecycle hooks.

    Subclasses only need to implement :meth:`get_action`. The constructor takes
    the context as its single positional argument, so the resolver hands it
    over automatically.
    """

    def __init__(self, context: EngineContext | None = None) -> None:
        self.context = context

    def reset(self) -> None:
        pass

    def get_action(self, player: int, state: Any) -> Any:
        raise NotImplementedError

    def clone(self) -> "BaseAgent":
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def legal_actions(state: Any, player: int) -> list[Any]:
    """Return ``state.legal_actions(player)`` as a list, or ``[]`` if unsupported."""

    provider = getattr(state, "legal_actions", None)
    if not callable(provider):
        return []
    return list(provider(player))


__all__ = ["BaseAgent", "legal_actions"]
