from __future__ import annotations

import json
from pathlib import Path

from tools.reports import status_report


def _write_events(path: Path, events: list[dict]) -> None:
    lines = [json.dumps(event, sort_keys=True) for event in events]
    path.write_text("\n".join(lines), encoding="utf-8")


def test_aggregate_returns_plain_dicts(tmp_path):
    events = [
        {"event": "solver.completed", "status": "level0", "solved": True, "trials": 0, "puzzle_digest": "a", "time_ms": 3},
        {"event": "solver.completed", "status": "level1", "solved": True, "trials": 48, "puzzle_digest": "b", "time_ms": 40},
        {"event": "solver.completed", "status": "unsolved", "solved": False, "trials": 200, "puzzle_digest": "c", "time_ms": 90},
        {"event": "solver.started", "status": "level0"},
    ]
    log_path = tmp_path / "log.jsonl"
    _write_events(log_path, events)

    summary = status_report.aggregate([log_path], top=2)

    assert summary["total_events"] == 3
    assert summary["status"] == {"level0": 1, "level1": 1, "unsolved": 1}
    assert isinstance(summary["status"], dict)
    assert summary["solved_ratio"] == 0.6667
    assert summary["mean_trials"] == 82.67
    assert summary["slowest"] == [("c", 90), ("b", 40)]

    canonical = json.loads(summary["canonical"])
    assert canonical == {
        "total_events": 3,
        "status": summary["status"],
        "solved_ratio": 0.6667,
        "mean_trials": 82.67,
        "slowest": [["c", 90], ["b", 40]],
    }


def test_aggregate_of_no_events(tmp_path):
    log_path = tmp_path / "empty.jsonl"
    log_path.write_text("\n", encoding="utf-8")

    summary = status_report.aggregate([log_path])

    assert summary["total_events"] == 0
    assert summary["solved_ratio"] == 0.0
    assert summary["slowest"] == []
