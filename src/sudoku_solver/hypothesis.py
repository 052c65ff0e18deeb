"""Level 1: single-hypothesis search on top of propagation.

Every undetermined cell is tried with each of its candidates on a private
clone of the grid.  Trials are independent, so they may be evaluated by a
pool; outcomes are still consumed in trial order (cell ascending, then digit
ascending) and the first solved one wins.  A trial grid is never searched
again, so puzzles needing two chained hypotheses stay unsolved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Iterator, Optional

from orchestrator.executor import Executor, SequentialExecutor

from .grid import Cell, Grid, clone, is_solved
from .propagate import propagate

_LOGGER = logging.getLogger(__name__)

TECHNIQUE_ID = "level1.hypothesis"


@dataclass(frozen=True)
class Trial:
    """Speculative assignment of ``digit`` to ``cell``."""

    cell: int
    digit: int

    def to_payload(self) -> dict:
        return {"cell": self.cell, "digit": self.digit}


@dataclass(frozen=True)
class TrialOutcome:
    trial: Trial
    solved: bool
    grid: Optional[Grid]
    passes: int


@dataclass(frozen=True)
class SearchResult:
    """Result of a level 1 search.

    ``grid`` is the solved trial grid on success and the untouched input grid
    otherwise; ``trials`` counts the outcomes examined before stopping.
    """

    grid: Grid
    trial: Optional[Trial]
    trials: int

    @property
    def solved(self) -> bool:
        return self.trial is not None


def iter_trials(grid: Grid) -> Iterator[Trial]:
    for index, cell in enumerate(grid):
        if len(cell) > 1:
            for digit in cell:
                yield Trial(index, digit)


def run_trial(grid: Grid, trial: Trial) -> TrialOutcome:
    """Force ``trial`` on a clone of ``grid`` and propagate to fixpoint."""

    candidate = clone(grid)
    candidate[trial.cell] = Cell((trial.digit,))
    passes = propagate(candidate)
    solved = is_solved(candidate)
    return TrialOutcome(trial=trial, solved=solved, grid=candidate if solved else None, passes=passes)


def search(grid: Grid, *, executor: Executor | None = None) -> SearchResult:
    runner = executor if executor is not None else SequentialExecutor()
    examined = 0
    for outcome in runner.map(partial(run_trial, grid), iter_trials(grid)):
        examined += 1
        if outcome.solved:
            _LOGGER.debug(
                "hypothesis cell=%d digit=%d solved the grid after %d trial(s)",
                outcome.trial.cell,
                outcome.trial.digit,
                examined,
            )
            return SearchResult(grid=outcome.grid, trial=outcome.trial, trials=examined)
    _LOGGER.debug("no single hypothesis solved the grid (%d trial(s))", examined)
    return SearchResult(grid=grid, trial=None, trials=examined)


__all__ = [
    "TECHNIQUE_ID",
    "SearchResult",
    "Trial",
    "TrialOutcome",
    "iter_trials",
    "run_trial",
    "search",
]
