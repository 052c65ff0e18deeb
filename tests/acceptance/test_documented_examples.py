from __future__ import annotations

import pytest

from orchestrator.executor import PoolExecutor
from sudoku_solver import solve
from sudoku_solver.examples import EXAMPLES, LEVEL0_SOLUTION, LEVEL1_SOLUTION
from sudoku_solver.solver import SolveStatus

EXPECTED = {
    "level0": (SolveStatus.PROPAGATION, LEVEL0_SOLUTION),
    "level1": (SolveStatus.HYPOTHESIS, LEVEL1_SOLUTION),
    "level8": (SolveStatus.UNSOLVED, None),
}


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_documented_example_levels(name):
    status, solution = EXPECTED[name]

    result = solve(EXAMPLES[name])

    assert result.status is status
    if solution is not None:
        assert result.values == solution


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_process_pool_is_deterministic(name):
    sequential = solve(EXAMPLES[name])

    with PoolExecutor(kind="process", max_workers=2) as pool:
        first = solve(EXAMPLES[name], executor=pool)
        second = solve(EXAMPLES[name], executor=pool)

    assert first == sequential
    assert second == sequential
