"""Convenience re-exports for test helpers."""

from __future__ import annotations

from .distributions import (
    ScriptedDraws,
    assert_distribution_close,
    evenly_spaced_draws,
    write_pyproject,
)

__all__ = [
    "ScriptedDraws",
    "assert_distribution_close",
    "evenly_spaced_draws",
    "write_pyproject",
]
