"""General utility helpers for tourney."""

from __future__ import annotations

from .diagnostics import DiscardingSink, redirect_output, redirect_to_file
from .entry_points import load_callable

__all__ = ["DiscardingSink", "load_callable", "redirect_output", "redirect_to_file"]
