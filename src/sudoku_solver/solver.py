"""End-to-end solve pipeline: propagation first, a single hypothesis second."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

from contracts.errors import ContradictionError
from orchestrator.executor import Executor

from .delta import Delta, DeltaOp
from .grid import (
    Grid,
    PuzzleValue,
    build,
    candidate_count,
    empty_cells,
    is_solved,
    state_digest,
    values,
)
from .hypothesis import TECHNIQUE_ID as HYPOTHESIS_TECHNIQUE_ID
from .hypothesis import Trial, search
from .propagate import propagate
from .trace import TRACE_LEVELS, SolveTrace, SolveTraceEntry

_LOGGER = logging.getLogger(__name__)

CONTRADICTION_POLICIES = ("status", "raise")


class SolveStatus(str, Enum):
    """Which technique, if any, fully determined the grid."""

    ALREADY_SOLVED = "already_solved"
    PROPAGATION = "level0"
    HYPOTHESIS = "level1"
    UNSOLVED = "unsolved"
    CONTRADICTION = "contradiction"

    @property
    def solved(self) -> bool:
        return self in (SolveStatus.ALREADY_SOLVED, SolveStatus.PROPAGATION, SolveStatus.HYPOTHESIS)


@dataclass(frozen=True)
class SolveResult:
    """Outcome of :func:`solve`."""

    status: SolveStatus
    values: Tuple[int, ...]
    passes: int
    trials: int = 0
    hypothesis: Optional[Trial] = None
    contradictions: Tuple[int, ...] = ()
    trace: Optional[SolveTrace] = field(default=None, compare=False)
    grid: Optional[Grid] = field(default=None, compare=False, repr=False)

    @property
    def solved(self) -> bool:
        return self.status.solved

    def to_payload(self) -> dict:
        payload = {
            "status": self.status.value,
            "solved": self.solved,
            "values": list(self.values),
            "passes": self.passes,
            "trials": self.trials,
            "hypothesis": None if self.hypothesis is None else self.hypothesis.to_payload(),
            "contradictions": list(self.contradictions),
        }
        if self.trace is not None:
            payload["trace"] = self.trace.to_payload()
        return payload


def solve(
    puzzle: Sequence[PuzzleValue],
    *,
    executor: Executor | None = None,
    trace_level: str = "none",
    on_contradiction: str = "status",
) -> SolveResult:
    """Solve ``puzzle`` (81 digits or blanks, row-major).

    Parameters
    ----------
    puzzle:
        Row-major sequence of 81 entries; ``None`` (or ``0``) marks a blank.
        The givens are not checked for duplicates.
    executor:
        Backend used to evaluate hypothesis trials.  Defaults to sequential
        evaluation; pooled executors yield the same result.
    trace_level:
        ``"none"`` or ``"steps"``.  With ``"steps"`` every propagation pass
        and the winning hypothesis are recorded in ``SolveResult.trace``.
    on_contradiction:
        ``"status"`` reports a cell left without candidates as
        :attr:`SolveStatus.CONTRADICTION`; ``"raise"`` raises
        :class:`contracts.errors.ContradictionError` instead.

    Returns
    -------
    SolveResult
        Values are the solved digits, or ``0`` for cells still undetermined.
    """

    if trace_level not in TRACE_LEVELS:
        raise ValueError(f"Unsupported trace level: {trace_level!r}")
    if on_contradiction not in CONTRADICTION_POLICIES:
        raise ValueError(f"Unsupported contradiction policy: {on_contradiction!r}")

    trace = SolveTrace() if trace_level != "none" else None
    grid = build(puzzle)
    fully_given = is_solved(grid)

    passes = propagate(grid, trace=trace)

    empty = empty_cells(grid)
    if empty:
        _LOGGER.warning("propagation left %d cell(s) without candidates", len(empty))
        if on_contradiction == "raise":
            raise ContradictionError(empty)
        return SolveResult(
            status=SolveStatus.CONTRADICTION,
            values=values(grid),
            passes=passes,
            contradictions=empty,
            trace=trace,
            grid=grid,
        )

    if is_solved(grid):
        _LOGGER.info("solved with level0 algorithm")
        status = SolveStatus.ALREADY_SOLVED if fully_given else SolveStatus.PROPAGATION
        return SolveResult(status=status, values=values(grid), passes=passes, trace=trace, grid=grid)

    outcome = search(grid, executor=executor)
    if outcome.solved:
        _LOGGER.info("solved with level1 algorithm")
        if trace is not None:
            _record_hypothesis(trace, grid, outcome.grid, outcome.trial, outcome.trials)
        return SolveResult(
            status=SolveStatus.HYPOTHESIS,
            values=values(outcome.grid),
            passes=passes,
            trials=outcome.trials,
            hypothesis=outcome.trial,
            trace=trace,
            grid=outcome.grid,
        )

    _LOGGER.info("can't be solved with level1 algorithm")
    return SolveResult(
        status=SolveStatus.UNSOLVED,
        values=values(grid),
        passes=passes,
        trials=outcome.trials,
        trace=trace,
        grid=grid,
    )


def _record_hypothesis(trace: SolveTrace, before: Grid, after: Grid, trial: Trial, trials: int) -> None:
    placements = sum(1 for a, b in zip(before, after) if len(a) > 1 and len(b) == 1)
    trace.append(
        SolveTraceEntry(
            step=trace.next_step,
            technique_id=HYPOTHESIS_TECHNIQUE_ID,
            deltas=(Delta(DeltaOp.PLACE, trial.cell, trial.digit),),
            placements=placements,
            candidates_removed=candidate_count(before) - candidate_count(after),
            state_hash_before=state_digest(before),
            state_hash_after=state_digest(after),
            note=f"trials={trials}",
        )
    )


__all__ = ["CONTRADICTION_POLICIES", "SolveResult", "SolveStatus", "solve"]
