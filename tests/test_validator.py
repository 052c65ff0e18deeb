from __future__ import annotations

import pytest

from contracts import loader
from contracts.errors import PuzzleValidationError
from contracts.validator import assert_valid_puzzle, validate_puzzle, validate_report
from sudoku_solver.examples import LEVEL0_EXAMPLE


def test_documented_puzzles_are_valid():
    assert validate_puzzle(LEVEL0_EXAMPLE).ok
    assert validate_puzzle([0] * 81).ok


def test_duplicate_givens_are_not_a_shape_error():
    puzzle = [None] * 81
    puzzle[0] = puzzle[1] = 4

    assert validate_puzzle(puzzle).ok


def test_issues_carry_json_paths():
    puzzle = [None] * 81
    puzzle[3] = 12
    puzzle[70] = "7"

    report = validate_puzzle(puzzle)

    assert not report.ok
    assert [issue.path for issue in report.errors] == ["$[3]", "$[70]"]
    assert all(issue.code == "schema.anyOf" for issue in report.errors)
    assert all(issue.severity == "ERROR" for issue in report.errors)


def test_wrong_length_is_reported_at_the_root():
    report = validate_puzzle([None] * 9)

    assert [(issue.code, issue.path) for issue in report.errors] == [("schema.minItems", "$")]
    with pytest.raises(PuzzleValidationError, match=r"^\$: "):
        assert_valid_puzzle([None] * 9)


def test_report_rejects_unknown_status():
    payload = {
        "status": "level2",
        "solved": False,
        "values": [0] * 81,
        "passes": 1,
        "trials": 0,
        "hypothesis": None,
        "contradictions": [],
    }

    report = validate_report(payload)

    assert not report.ok
    assert report.errors[0].path == "$.status"


def test_catalog_describes_every_schema():
    catalog = loader.load_catalog()

    assert set(catalog) == {"Puzzle", "SolveReport"}
    for payload_type, descriptor in catalog.items():
        assert loader.load_schema(payload_type)["$id"] == descriptor.schema_id
