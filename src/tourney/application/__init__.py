"""Application services: wiring and the tournament pipeline."""

from __future__ import annotations

from .context import ApplicationContext, create_engine_context
from .pipeline import Phase, TournamentOutcome, TournamentPipeline

__all__ = [
    "ApplicationContext",
    "Phase",
    "TournamentOutcome",
    "TournamentPipeline",
    "create_engine_context",
]
