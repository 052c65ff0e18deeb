"""Aggregation helpers for solver event logs."""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Iterable, Mapping

__all__ = ["aggregate"]


def _load_events(paths: Iterable[Path]) -> Iterable[Mapping[str, object]]:
    for path in paths:
        for line in path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            yield json.loads(line)


def aggregate(paths: Iterable[Path], *, top: int = 5) -> Mapping[str, object]:
    statuses: Counter = Counter()
    slowest: list[tuple[str, int]] = []
    samples = 0
    solved = 0
    trials = 0
    for event in _load_events(paths):
        if event.get("event") != "solver.completed":
            continue
        samples += 1
        statuses[str(event.get("status", "unknown"))] += 1
        if event.get("solved"):
            solved += 1
        trials += int(event.get("trials", 0) or 0)
        slowest.append((str(event.get("puzzle_digest", "")), int(event.get("time_ms", 0) or 0)))

    slowest.sort(key=lambda item: (-item[1], item[0]))
    summary = {
        "total_events": samples,
        "status": dict(sorted(statuses.items())),
        "solved_ratio": round(solved / samples, 4) if samples else 0.0,
        "mean_trials": round(trials / samples, 2) if samples else 0.0,
        "slowest": slowest[:top],
    }
    summary["canonical"] = json.dumps(summary, sort_keys=True, separators=(",", ":"))
    return summary
