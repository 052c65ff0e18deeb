"""Level 0: group-wise elimination of determined digits until fixpoint."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .delta import Delta, DeltaOp
from .grid import Grid, Group, candidate_count, clone, equals, groups as make_groups, state_digest
from .trace import SolveTrace, SolveTraceEntry

_LOGGER = logging.getLogger(__name__)

TECHNIQUE_ID = "level0.eliminate"


def elimination_pass(grid: Grid, groups: Sequence[Group] | None = None) -> List[Delta]:
    """Run one elimination pass over all groups of ``grid``.

    For every cell that is a singleton ``{v}`` when visited, ``v`` is removed
    from the other eight cells of the same group.  Cells emptied by an earlier
    removal are no longer singletons and eliminate nothing.

    Returns
    -------
    List[Delta]
        One ``ELIM`` delta per removed candidate, in removal order.
    """

    removed: List[Delta] = []
    for group in groups if groups is not None else make_groups(grid):
        for index, cell in group.items():
            if len(cell) != 1:
                continue
            value = cell.first()
            for other_index, other in group.items():
                if other_index != index and other.discard(value):
                    removed.append(Delta(DeltaOp.ELIM, other_index, value))
    return removed


def propagate(grid: Grid, *, trace: SolveTrace | None = None) -> int:
    """Mutate ``grid`` in place until a full pass changes nothing.

    Returns the number of passes executed, including the final pass that
    confirmed the fixpoint.
    """

    group_list = make_groups(grid)
    passes = 0
    while True:
        backup = clone(grid)
        deltas = elimination_pass(grid, group_list)
        passes += 1
        if trace is not None and deltas:
            _record_pass(trace, backup, grid, deltas)
        if equals(grid, backup):
            break
    _LOGGER.debug("propagation reached fixpoint after %d pass(es)", passes)
    return passes


def _record_pass(trace: SolveTrace, before: Grid, after: Grid, deltas: Sequence[Delta]) -> None:
    placements = sum(1 for a, b in zip(before, after) if len(a) > 1 and len(b) == 1)
    trace.append(
        SolveTraceEntry(
            step=trace.next_step,
            technique_id=TECHNIQUE_ID,
            deltas=tuple(deltas),
            placements=placements,
            candidates_removed=candidate_count(before) - candidate_count(after),
            state_hash_before=state_digest(before),
            state_hash_after=state_digest(after),
        )
    )


__all__ = ["TECHNIQUE_ID", "elimination_pass", "propagate"]
