"""Error types and payload contracts for the solver."""

from .errors import (
    ContradictionError,
    PuzzleValidationError,
    SolverError,
    ValidationIssue,
    ValidationReport,
)
from .validator import assert_valid_puzzle, validate_puzzle, validate_report

__all__ = [
    "ContradictionError",
    "PuzzleValidationError",
    "SolverError",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid_puzzle",
    "validate_puzzle",
    "validate_report",
]
