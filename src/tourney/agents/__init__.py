"""Agent base classes, built-in agents and name resolution."""

from __future__ import annotations

from .base import BaseAgent, legal_actions
from .builtin import BUILTIN_AGENTS, FirstMoveAgent, PassiveAgent, RandomAgent
from .registry import AgentSourceRegistry
from .resolver import BUILTIN_NAMESPACES, AgentResolver, accepts_context, construct_agent

__all__ = [
    "AgentResolver",
    "AgentSourceRegistry",
    "BaseAgent",
    "BUILTIN_AGENTS",
    "BUILTIN_NAMESPACES",
    "FirstMoveAgent",
    "PassiveAgent",
    "RandomAgent",
    "accepts_context",
    "construct_agent",
    "legal_actions",
]
