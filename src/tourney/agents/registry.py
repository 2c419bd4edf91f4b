"""Agent types loaded from bot bundles, keyed by class name."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator


class AgentSourceRegistry:
    """Populated once from the bundle-loading phase, read-only afterwards.

    When two bundles define a class with the same name the later one wins.
    """

    def __init__(self) -> None:
        self._types: Dict[str, type] = {}
        self._sealed = False

    def populate(self, agent_types: Iterable[type]) -> None:
        if self._sealed:
            raise RuntimeError("Agent sources are read-only once populated.")
        for agent_type in agent_types:
            self._types[agent_type.__name__] = agent_type
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def get(self, class_name: str) -> type | None:
        return self._types.get(class_name)

    def names(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, class_name: object) -> bool:
        return class_name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)


__all__ = ["AgentSourceRegistry"]
