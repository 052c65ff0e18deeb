"""Candidate-elimination Sudoku solver with single-hypothesis search."""

from __future__ import annotations

from .delta import Delta, DeltaOp, DeltaValidationError, canonicalise_deltas
from .grid import (
    Cell,
    Grid,
    Group,
    build,
    clone,
    empty_cells,
    equals,
    groups,
    is_solved,
    values,
)
from .hypothesis import SearchResult, Trial, TrialOutcome, iter_trials, run_trial, search
from .propagate import elimination_pass, propagate
from .solver import SolveResult, SolveStatus, solve
from .text import format_values, parse_puzzle, render_grid
from .trace import SolveTrace, SolveTraceEntry, TraceValidationError

__all__ = [
    "Cell",
    "Delta",
    "DeltaOp",
    "DeltaValidationError",
    "Grid",
    "Group",
    "SearchResult",
    "SolveResult",
    "SolveStatus",
    "SolveTrace",
    "SolveTraceEntry",
    "TraceValidationError",
    "Trial",
    "TrialOutcome",
    "build",
    "canonicalise_deltas",
    "clone",
    "elimination_pass",
    "empty_cells",
    "equals",
    "format_values",
    "groups",
    "is_solved",
    "iter_trials",
    "parse_puzzle",
    "propagate",
    "render_grid",
    "run_trial",
    "search",
    "solve",
    "values",
]
