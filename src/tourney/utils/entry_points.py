"""Loading of ``module:callable`` entry points for runners and engines."""

from __future__ import annotations

import importlib
from typing import Callable

from tourney.domain.errors import ConfigurationError


def load_callable(spec: str) -> Callable:
    """Load a callable identified by ``module:attribute`` spec."""

    if ":" not in spec:
        raise ConfigurationError(f"Invalid entry point '{spec}'. Expected 'module:callable'.")
    module_path, attr_path = spec.split(":", 1)
    try:
        module = importlib.import_module(module_path)
    except Exception as exc:
        raise ConfigurationError(f"Failed to import module '{module_path}' for entry point '{spec}': {exc}") from exc
    target: object = module
    try:
        for part in attr_path.split("."):
            target = getattr(target, part)
    except AttributeError as exc:
        raise ConfigurationError(f"Entry point '{spec}' does not define '{attr_path}'.") from exc
    if not callable(target):
        raise ConfigurationError(f"Entry point '{spec}' is not callable.")
    return target


__all__ = ["load_callable"]
