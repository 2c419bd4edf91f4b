"""Example bot bundle.

Point ``--bot-folder``/``botFolder`` at this directory to make ``GreedyAgent``
and ``StubbornAgent`` available by name.
"""

from __future__ import annotations

from typing import Any

from tourney.agents import BaseAgent, legal_actions


class GreedyAgent(BaseAgent):
    """Plays the legal action the state scores highest."""

    def get_action(self, player: int, state: Any) -> Any:
        actions = legal_actions(state, player)
        if not actions:
            return None
        score = getattr(state, "score", None)
        if not callable(score):
            return actions[0]
        return max(actions, key=lambda action: score(player, action))


class StubbornAgent:
    """Repeats a fixed action. Constructed without arguments."""

    def __init__(self) -> None:
        self.action = None

    def reset(self) -> None:
        pass

    def get_action(self, player: int, state: Any) -> Any:
        return self.action
