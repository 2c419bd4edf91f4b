"""Configuration loading and validation."""

from __future__ import annotations

from .loader import config_from_arguments, config_from_mapping, load_config_file, split_list
from .validators import build_validator, format_error, validate_config, validate_with_schema

__all__ = [
    "build_validator",
    "config_from_arguments",
    "config_from_mapping",
    "format_error",
    "load_config_file",
    "split_list",
    "validate_config",
    "validate_with_schema",
]
