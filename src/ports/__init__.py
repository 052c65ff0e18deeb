"""Configured entry points into the solver."""

from __future__ import annotations

from .solver_port import SolverSettings, resolve_settings, solve_puzzle

__all__ = ["SolverSettings", "resolve_settings", "solve_puzzle"]
