"""Resolve agent names into constructed agents.

Lookup order for a name such as ``RandomAgent(3)``:

1. the class name (``RandomAgent``) in the agent types loaded from bundles;
2. the built-in catalog, probing each namespace in :data:`BUILTIN_NAMESPACES`
   in turn (``abstraction.RandomAgent``, ``RandomAgent``, ``core.RandomAgent``...).

Only a missing type moves the search on. A type that is found but fails to
construct ends the search with :class:`AgentResolutionError`.
"""

from __future__ import annotations

import inspect
from typing import Mapping, Sequence

from tourney.domain.agents import AgentDescriptor, EngineContext
from tourney.domain.config import agent_class_name
from tourney.domain.errors import AgentResolutionError

from .builtin import BUILTIN_AGENTS
from .registry import AgentSourceRegistry

BUILTIN_NAMESPACES: tuple[str, ...] = ("abstraction", "", "core", "portfolio", "mcts", "ahtn", "rai")


def qualified_name(namespace: str, class_name: str) -> str:
    return f"{namespace}.{class_name}" if namespace else class_name


def accepts_context(agent_type: type) -> bool:
    """True when the constructor can be called with a single positional argument."""

    try:
        signature = inspect.signature(agent_type)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(object())
    except TypeError:
        return False
    return True


def construct_agent(agent_type: type, context: EngineContext, name: str) -> object:
    """Build *agent_type* with the context argument if it takes one, else bare."""

    try:
        if accepts_context(agent_type):
            return agent_type(context)
        return agent_type()
    except Exception as exc:
        raise AgentResolutionError(name, f"{agent_type.__name__} could not be constructed: {exc}") from exc


class AgentResolver:
    """Turns agent names into :class:`AgentDescriptor` objects."""

    def __init__(
        self,
        sources: AgentSourceRegistry | None = None,
        *,
        catalog: Mapping[str, type] = BUILTIN_AGENTS,
        namespaces: Sequence[str] = BUILTIN_NAMESPACES,
    ) -> None:
        self.sources = sources if sources is not None else AgentSourceRegistry()
        self.catalog = catalog
        self.namespaces = tuple(namespaces)

    def locate(self, class_name: str) -> type | None:
        """Find the agent type for *class_name* without constructing it."""

        agent_type = self.sources.get(class_name)
        if agent_type is not None:
            return agent_type
        for namespace in self.namespaces:
            agent_type = self.catalog.get(qualified_name(namespace, class_name))
            if agent_type is not None:
                return agent_type
        return None

    def resolve(self, name: str, context: EngineContext) -> AgentDescriptor:
        class_name = agent_class_name(name)
        agent_type = self.locate(class_name)
        if agent_type is None:
            raise AgentResolutionError(name, f"could not find agent type '{class_name}'")
        return AgentDescriptor(name=name, agent=construct_agent(agent_type, context, name))

    def available(self) -> list[str]:
        """Names that resolve, bundle agents first."""

        names = self.sources.names()
        names.extend(sorted(self.catalog))
        return names


__all__ = [
    "AgentResolver",
    "BUILTIN_NAMESPACES",
    "accepts_context",
    "construct_agent",
    "qualified_name",
]
