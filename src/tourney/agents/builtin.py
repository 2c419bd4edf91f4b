"""Built-in agents and the static catalog the resolver searches."""

from __future__ import annotations

import random
from typing import Any, Dict

from tourney.domain.agents import EngineContext

from .base import BaseAgent, legal_actions


class PassiveAgent(BaseAgent):
    """Never acts."""

    def get_action(self, player: int, state: Any) -> Any:
        return None


class RandomAgent(BaseAgent):
    """Picks uniformly among the legal actions the state offers."""

    def __init__(self, context: EngineContext | None = None, seed: int | None = None) -> None:
        super().__init__(context)
        if seed is None and context is not None:
            seed = context.options.get("seed")
        self._seed = seed
        self._rng = random.Random(seed)

    def reset(self) -> None:
        self._rng = random.Random(self._seed)

    def get_action(self, player: int, state: Any) -> Any:
        actions = legal_actions(state, player)
        if not actions:
            return None
        return self._rng.choice(actions)


class FirstMoveAgent:
    """Always plays the first legal action. Takes no constructor arguments."""

    def reset(self) -> None:
        pass

    def get_action(self, player: int, state: Any) -> Any:
        actions = legal_actions(state, player)
        return actions[0] if actions else None


BUILTIN_AGENTS: Dict[str, type] = {
    "PassiveAgent": PassiveAgent,
    "RandomAgent": RandomAgent,
    "core.FirstMoveAgent": FirstMoveAgent,
}


__all__ = ["BUILTIN_AGENTS", "FirstMoveAgent", "PassiveAgent", "RandomAgent"]
