from __future__ import annotations

import json

import pytest

import feature_flags
import project_config
from ports import solver_port
from sudoku_solver.examples import LEVEL0_SOLUTION, LEVEL1_EXAMPLE, LEVEL1_SOLUTION
from sudoku_solver.text import format_values
from tools.cli import solve as cli


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for alias in solver_port._ENV_KEYS.values():
        monkeypatch.delenv(alias, raising=False)
        monkeypatch.delenv(alias.replace("SUDOKU_SOLVER_", "CLI_SOLVER_", 1), raising=False)
    for alias in feature_flags.PARALLEL_ENV_KEYS:
        monkeypatch.delenv(alias, raising=False)
    monkeypatch.delenv("SUDOKU_SOLVER_CONFIG", raising=False)
    project_config.reload()
    feature_flags.reload()


def test_solve_example_as_json(capsys):
    assert cli.main(["solve", "--example", "level0", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "level0"
    assert payload["grid"] == format_values(LEVEL0_SOLUTION)
    assert "trace" not in payload


def test_solve_puzzle_string_prints_grid_and_hypothesis(capsys):
    text = format_values(LEVEL1_EXAMPLE)

    assert cli.main(["solve", text]) == 0

    out = capsys.readouterr().out
    assert "| 4 2 5 | 9 6 1 | 7 8 3 |" in out
    assert "status: level1" in out
    assert "hypothesis: r4c3=1 after 48 trial(s)" in out


def test_unsolved_puzzle_exits_with_one(capsys):
    assert cli.main(["solve", "--example", "level8", "--sequential"]) == 1
    assert "status: unsolved" in capsys.readouterr().out


def test_trace_flag_includes_steps(capsys):
    assert cli.main(["solve", "--example", "level1", "--json", "--trace"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["trace"][-1]["technique_id"] == "level1.hypothesis"


def test_solve_reads_puzzle_file(tmp_path, capsys):
    path = tmp_path / "puzzle.txt"
    path.write_text(format_values(LEVEL1_EXAMPLE).replace("0", ".") + "\n", encoding="utf-8")

    assert cli.main(["solve", "--file", str(path), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["values"] == list(LEVEL1_SOLUTION)


def test_invalid_puzzle_exits_with_message():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["solve", "123"])

    assert "Invalid puzzle" in str(excinfo.value)


def test_batch_summarises_every_line(tmp_path, capsys):
    path = tmp_path / "batch.txt"
    path.write_text(
        "# documented examples\n" + format_values(LEVEL1_EXAMPLE) + "\n\n" + format_values(LEVEL0_SOLUTION) + "\n",
        encoding="utf-8",
    )

    assert cli.main(["batch", str(path), "--parallel", "--executor", "thread", "--workers", "2"]) == 0

    summaries = json.loads(capsys.readouterr().out)
    assert [item["status"] for item in summaries] == ["level1", "already_solved"]
    assert summaries[0]["trials"] == 48


def test_report_aggregates_logged_events(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SUDOKU_SOLVER_EVENTS_DIR", str(tmp_path))
    assert cli.main(["solve", "--example", "level0", "--log-events"]) == 0
    assert cli.main(["solve", "--example", "level8", "--log-events"]) == 1
    capsys.readouterr()

    assert cli.main(["report", str(tmp_path)]) == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["total_events"] == 2
    assert summary["status"] == {"level0": 1, "unsolved": 1}


def test_report_without_logs_exits(tmp_path):
    with pytest.raises(SystemExit):
        cli.main(["report", str(tmp_path)])


def test_text_output_prints_trace_json(capsys):
    assert cli.main(["solve", "--example", "level1", "--trace"]) == 0

    out = capsys.readouterr().out
    steps = json.loads(out.split("trace:\n", 1)[1])
    assert steps[-1]["technique_id"] == "level1.hypothesis"
    assert steps[-1]["deltas"] == [{"op": "PLACE", "cell": 29, "digit": 1}]
    assert [step["step"] for step in steps] == list(range(1, len(steps) + 1))
