"""Public facade validating puzzle and solve-report payloads."""

from __future__ import annotations

from typing import Any, List, Sequence

from . import loader
from .errors import PuzzleValidationError, ValidationIssue, ValidationReport, make_error


def _jsonschema_path(path: Sequence[Any]) -> str:
    components: List[str] = ["$"]
    for part in path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _validate(payload: Any, payload_type: str) -> ValidationReport:
    validator = loader.get_validator(payload_type)
    issues: List[ValidationIssue] = []
    for exc in sorted(validator.iter_errors(payload), key=lambda err: _jsonschema_path(err.absolute_path)):
        code = f"schema.{exc.validator}"
        issues.append(make_error(code, exc.message, _jsonschema_path(exc.absolute_path)))
    return ValidationReport(ok=not issues, errors=issues)


def validate_puzzle(puzzle: Any) -> ValidationReport:
    """Check that ``puzzle`` is 81 entries of ``None`` or an integer 0..9.

    Only the shape is checked; duplicate givens are accepted.
    """

    if isinstance(puzzle, tuple):
        puzzle = list(puzzle)
    return _validate(puzzle, "Puzzle")


def assert_valid_puzzle(puzzle: Any) -> None:
    report = validate_puzzle(puzzle)
    if not report.ok:
        raise PuzzleValidationError(report)


def validate_report(payload: Any) -> ValidationReport:
    return _validate(payload, "SolveReport")


__all__ = ["assert_valid_puzzle", "validate_puzzle", "validate_report"]
