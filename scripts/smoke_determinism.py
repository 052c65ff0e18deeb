#!/usr/bin/env python3
"""Smoke-test that pooled hypothesis search matches sequential solving."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from contracts import validator
from orchestrator.executor import PoolExecutor, SequentialExecutor
from sudoku_solver import solve
from sudoku_solver.examples import EXAMPLES


def _run(name: str, executor) -> dict:
    result = solve(EXAMPLES[name], executor=executor, trace_level="steps")
    payload = result.to_payload()
    validator_report = validator.validate_report(payload)
    if not validator_report.ok:
        raise SystemExit(f"{name}: report failed validation: {validator_report.errors[0].msg}")
    return payload


def main() -> int:
    for name in sorted(EXAMPLES):
        baseline = _run(name, SequentialExecutor())
        for kind in ("thread", "process"):
            with PoolExecutor(kind=kind, max_workers=4) as pool:
                pooled = _run(name, pool)
            if pooled != baseline:
                print(f"determinism failed for {name} on {kind} pool: {pooled['status']} vs {baseline['status']}")
                return 1
        print(f"{name}: {baseline['status']} ({baseline['trials']} trial(s))")

    print("Determinism smoke-test passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
