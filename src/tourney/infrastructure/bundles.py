"""Discovery of agent types from a folder of Python bot bundles.

A bundle is either a ``*.py`` module or a package directory placed directly in
the bot folder. Every public class with a callable ``get_action`` that a bundle
defines, or that a package bundle imports from its own submodules, is offered
as an agent type. Names starting with ``_`` are ignored.
"""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType
from typing import Callable, Iterable, List

from tourney.domain.errors import BundleLoadError

BundleLoader = Callable[[Path], Iterable[type]]

_MODULE_PREFIX = "_tourney_bundle_"


def load_agent_types(folder: Path) -> List[type]:
    """Import every bundle in *folder* and return the agent types they define."""

    folder = Path(folder)
    if not folder.is_dir():
        raise BundleLoadError(f"Bot folder is not a directory: {folder}")

    agent_types: List[type] = []
    for path in _bundle_paths(folder):
        module = _import_bundle(path)
        found = _agent_types_in(module)
        print(f"Loaded {len(found)} agent type(s) from {path.name}")
        agent_types.extend(found)
    return agent_types


def is_agent_type(candidate: object) -> bool:
    return (
        inspect.isclass(candidate)
        and not inspect.isabstract(candidate)
        and callable(getattr(candidate, "get_action", None))
    )


def _bundle_paths(folder: Path) -> List[Path]:
    paths: List[Path] = []
    for entry in sorted(folder.iterdir()):
        if entry.name.startswith(("_", ".")):
            continue
        if entry.is_file() and entry.suffix == ".py":
            paths.append(entry)
        elif entry.is_dir() and (entry / "__init__.py").is_file():
            paths.append(entry)
    return paths


def _import_bundle(path: Path) -> ModuleType:
    module_name = f"{_MODULE_PREFIX}{path.stem}"
    if path.is_dir():
        spec = importlib.util.spec_from_file_location(
            module_name,
            path / "__init__.py",
            submodule_search_locations=[str(path)],
        )
    else:
        spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise BundleLoadError(f"Cannot import bundle {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise BundleLoadError(f"Failed to import bundle {path}: {exc}") from exc
    return module


def _agent_types_in(module: ModuleType) -> List[type]:
    return [
        member
        for name, member in inspect.getmembers(module, is_agent_type)
        if not name.startswith("_") and _defined_in_bundle(member, module.__name__)
    ]


def _defined_in_bundle(member: type, bundle_name: str) -> bool:
    # package bundles usually re-export agents from their own submodules
    origin = member.__module__
    return origin == bundle_name or origin.startswith(bundle_name + ".")


__all__ = ["BundleLoader", "load_agent_types", "is_agent_type"]
