"""Shared error types for the solver and its payload contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

SEVERITY_ERROR = "ERROR"


class SolverError(RuntimeError):
    """Base class for errors raised by the solving pipeline."""


class ContradictionError(SolverError):
    """Raised when propagation leaves cells without any candidate."""

    def __init__(self, cells: Iterable[int]) -> None:
        self.cells: Tuple[int, ...] = tuple(cells)
        preview = ", ".join(str(cell) for cell in self.cells[:9])
        super().__init__(f"contradiction: no candidates left for cell(s) {preview}")


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by a schema check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of validating one payload."""

    ok: bool
    errors: List[ValidationIssue]


class PuzzleValidationError(ValueError):
    """Raised when a puzzle payload does not have the expected shape."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        first = report.errors[0] if report.errors else None
        detail = f"{first.path}: {first.msg}" if first is not None else "invalid puzzle"
        super().__init__(detail)


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


__all__ = [
    "SEVERITY_ERROR",
    "ContradictionError",
    "PuzzleValidationError",
    "SolverError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
]
