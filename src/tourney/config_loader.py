"""Public facade over configuration types and utilities."""

from __future__ import annotations

from tourney.domain.config import TournamentConfig, agent_class_name, expected_match_count
from tourney.domain.errors import ConfigurationError
from tourney.infrastructure.config.loader import (
    config_from_arguments,
    config_from_mapping,
    load_config_file,
    split_list,
)
from tourney.infrastructure.config.validators import validate_config

__all__ = [
    "ConfigurationError",
    "TournamentConfig",
    "agent_class_name",
    "config_from_arguments",
    "config_from_mapping",
    "expected_match_count",
    "load_config_file",
    "split_list",
    "validate_config",
]
