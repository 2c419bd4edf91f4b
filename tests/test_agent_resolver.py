"""Tests for agent name resolution."""

from __future__ import annotations

from typing import Any

import pytest

from tourney.agents import (
    AgentResolver,
    AgentSourceRegistry,
    BaseAgent,
    FirstMoveAgent,
    PassiveAgent,
    RandomAgent,
)
from tourney.agents.resolver import accepts_context
from tourney.domain.agents import EngineContext
from tourney.domain.errors import AgentResolutionError


class ContextAgent:
    def __init__(self, context: EngineContext) -> None:
        self.context = context

    def reset(self) -> None:
        pass

    def get_action(self, player: int, state: Any) -> Any:
        return None


class BareAgent:
    def reset(self) -> None:
        pass

    def get_action(self, player: int, state: Any) -> Any:
        return None


class ExplodingAgent(BareAgent):
    def __init__(self) -> None:
        raise RuntimeError("missing weights file")


def _bundle(*agent_types: type) -> AgentSourceRegistry:
    sources = AgentSourceRegistry()
    sources.populate(agent_types)
    return sources


def test_builtin_agent_resolves() -> None:
    context = EngineContext(name="test")
    descriptor = AgentResolver().resolve("PassiveAgent", context)
    assert descriptor.name == "PassiveAgent"
    assert isinstance(descriptor.agent, PassiveAgent)
    assert descriptor.agent.context is context


def test_parameter_suffix_is_kept_on_descriptor() -> None:
    descriptor = AgentResolver().resolve("RandomAgent(7)", EngineContext())
    assert descriptor.name == "RandomAgent(7)"
    assert descriptor.class_name == "RandomAgent"
    assert isinstance(descriptor.agent, RandomAgent)


def test_bundle_types_take_precedence_over_builtins() -> None:
    override = type("RandomAgent", (BareAgent,), {})
    descriptor = AgentResolver(_bundle(override)).resolve("RandomAgent", EngineContext())
    assert type(descriptor.agent) is override


def test_namespaces_are_searched_in_order() -> None:
    early = type("Rush", (BareAgent,), {})
    late = type("Rush", (BareAgent,), {})
    resolver = AgentResolver(catalog={"core.Rush": late, "abstraction.Rush": early})
    assert type(resolver.resolve("Rush", EngineContext()).agent) is early


def test_namespaced_builtin_found_without_prefix() -> None:
    descriptor = AgentResolver().resolve("FirstMoveAgent", EngineContext())
    assert isinstance(descriptor.agent, FirstMoveAgent)


def test_context_only_passed_when_accepted() -> None:
    context = EngineContext(name="ctx")
    resolver = AgentResolver(catalog={"Ctx": ContextAgent, "Bare": BareAgent})
    assert resolver.resolve("Ctx", context).agent.context is context
    assert isinstance(resolver.resolve("Bare", context).agent, BareAgent)


def test_construction_failure_stops_the_search() -> None:
    resolver = AgentResolver(catalog={"abstraction.Boom": ExplodingAgent, "Boom": BareAgent})
    with pytest.raises(AgentResolutionError) as excinfo:
        resolver.resolve("Boom(1)", EngineContext())
    assert excinfo.value.agent_name == "Boom(1)"
    assert "missing weights file" in str(excinfo.value)


def test_unknown_agent_reports_name() -> None:
    with pytest.raises(AgentResolutionError) as excinfo:
        AgentResolver().resolve("NoSuchAgent(2)", EngineContext())
    assert excinfo.value.agent_name == "NoSuchAgent(2)"
    assert str(excinfo.value).startswith("Failed to load agent 'NoSuchAgent(2)'")


def test_accepts_context() -> None:
    assert accepts_context(BaseAgent)
    assert accepts_context(ContextAgent)
    assert not accepts_context(BareAgent)
    assert not accepts_context(ExplodingAgent)


def test_registry_is_populated_once() -> None:
    sources = _bundle(BareAgent)
    assert sources.sealed
    assert "BareAgent" in sources
    with pytest.raises(RuntimeError):
        sources.populate([ContextAgent])


def test_later_duplicate_bundle_type_wins() -> None:
    first = type("Dup", (BareAgent,), {})
    second = type("Dup", (BareAgent,), {})
    sources = _bundle(first, second)
    assert sources.get("Dup") is second
    assert len(sources) == 1


def test_available_lists_bundle_names_first() -> None:
    names = AgentResolver(_bundle(BareAgent)).available()
    assert names[0] == "BareAgent"
    assert "PassiveAgent" in names


def test_random_agent_seed_from_context_options() -> None:
    class State:
        def legal_actions(self, player: int) -> list[int]:
            return list(range(10))

    agent = RandomAgent(EngineContext(options={"seed": 42}))
    first = [agent.get_action(0, State()) for _ in range(5)]
    agent.reset()
    assert [agent.get_action(0, State()) for _ in range(5)] == first
