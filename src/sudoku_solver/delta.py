"""Delta primitives describing single candidate-state mutations.

Propagation reports every removed candidate as an ``ELIM`` delta; a successful
hypothesis is reported as a ``PLACE`` delta on the forced cell.  Deltas are
ordered canonically so traces stay byte-identical between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class DeltaValidationError(ValueError):
    """Raised when a delta refers to a cell or digit outside the grid."""


class DeltaOp(str, Enum):
    """Supported mutation kinds."""

    ELIM = "ELIM"
    PLACE = "PLACE"


@dataclass(frozen=True)
class Delta:
    """Canonical representation of a single state mutation."""

    op: DeltaOp
    cell: int
    digit: int

    def __post_init__(self) -> None:
        if not isinstance(self.op, DeltaOp):
            try:
                object.__setattr__(self, "op", DeltaOp(str(self.op)))
            except ValueError as exc:
                raise DeltaValidationError(f"Unsupported delta op: {self.op!r}") from exc
        if not 0 <= int(self.cell) <= 80:
            raise DeltaValidationError(f"cell must be in [0, 80], got {self.cell!r}")
        if not 1 <= int(self.digit) <= 9:
            raise DeltaValidationError(f"digit must be in [1, 9], got {self.digit!r}")

    def sort_key(self) -> Tuple[int, int, int]:
        """Return canonical sorting key (op -> cell -> digit)."""

        return (0 if self.op is DeltaOp.ELIM else 1, int(self.cell), int(self.digit))

    def to_payload(self) -> dict:
        return {"op": self.op.value, "cell": int(self.cell), "digit": int(self.digit)}


def canonicalise_deltas(deltas: Iterable[Delta]) -> Tuple[Delta, ...]:
    """Return deltas sorted according to the canonical order."""

    return tuple(sorted(deltas, key=Delta.sort_key))


__all__ = ["Delta", "DeltaOp", "DeltaValidationError", "canonicalise_deltas"]
