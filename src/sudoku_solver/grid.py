"""Candidate-set grid model for classic 9x9 Sudoku.

A :class:`Grid` owns 81 mutable :class:`Cell` objects addressed by index
(``9 * row + col``).  Rows, columns and boxes are exposed as :class:`Group`
views that hold indices into the grid rather than copies, so a candidate
removed through one group is immediately visible through the grid and through
the other two groups sharing that cell.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

DIGITS: Tuple[int, ...] = tuple(range(1, 10))
GRID_SIZE = 81

PuzzleValue = Optional[int]


class Cell:
    """Mutable set of candidate digits for one grid position."""

    __slots__ = ("_digits",)

    def __init__(self, digits: Iterable[int] = ()) -> None:
        self._digits = set(digits)

    def __contains__(self, digit: object) -> bool:
        return digit in self._digits

    def __len__(self) -> int:
        return len(self._digits)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._digits))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._digits == other._digits

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Cell({sorted(self._digits)!r})"

    @property
    def is_determined(self) -> bool:
        return len(self._digits) == 1

    def first(self) -> int:
        """Return the lowest candidate (the value when the cell is determined)."""

        if not self._digits:
            raise ValueError("cell has no candidates")
        return min(self._digits)

    def add(self, digit: int) -> None:
        self._digits.add(digit)

    def discard(self, digit: int) -> bool:
        """Remove ``digit`` and report whether it was a candidate."""

        if digit in self._digits:
            self._digits.remove(digit)
            return True
        return False

    def clone(self) -> "Cell":
        return Cell(self._digits)


def _row_indices(row: int) -> Tuple[int, ...]:
    return tuple(9 * row + col for col in range(9))


def _col_indices(col: int) -> Tuple[int, ...]:
    return tuple(9 * row + col for row in range(9))


def _box_indices(box: int) -> Tuple[int, ...]:
    return tuple(
        27 * (box // 3) + 9 * (j // 3) + 3 * (box % 3) + j % 3 for j in range(9)
    )


GROUP_LAYOUT: Tuple[Tuple[str, int, Tuple[int, ...]], ...] = (
    tuple(("row", n, _row_indices(n)) for n in range(9))
    + tuple(("col", n, _col_indices(n)) for n in range(9))
    + tuple(("box", n, _box_indices(n)) for n in range(9))
)


class Grid:
    """Ordered collection of exactly 81 cells."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Sequence[Cell]) -> None:
        if len(cells) != GRID_SIZE:
            raise ValueError(f"grid requires {GRID_SIZE} cells, got {len(cells)}")
        self._cells: List[Cell] = list(cells)

    def __len__(self) -> int:
        return GRID_SIZE

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __getitem__(self, index: int) -> Cell:
        return self._cells[index]

    def __setitem__(self, index: int, cell: Cell) -> None:
        self._cells[index] = cell

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return equals(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({format_candidates(self)!r})"

    def cell(self, row: int, col: int) -> Cell:
        return self._cells[9 * row + col]


@dataclass(frozen=True)
class Group:
    """A row, column or box viewed through its owning grid."""

    kind: str
    number: int
    indices: Tuple[int, ...]
    grid: Grid

    def __iter__(self) -> Iterator[Cell]:
        for index in self.indices:
            yield self.grid[index]

    def __len__(self) -> int:
        return len(self.indices)

    def items(self) -> Iterator[Tuple[int, Cell]]:
        """Yield ``(grid_index, cell)`` pairs in group order."""

        for index in self.indices:
            yield index, self.grid[index]


def build(puzzle: Sequence[PuzzleValue]) -> Grid:
    """Create a grid from 81 optional digits (``None`` or ``0`` means blank).

    Given digits become singleton cells, blanks start with every digit.  The
    givens are not checked for mutual consistency.
    """

    cells = []
    for value in puzzle:
        cell = Cell()
        for digit in DIGITS if value is None or value == 0 else (int(value),):
            cell.add(digit)
        cells.append(cell)
    return Grid(cells)


def groups(grid: Grid) -> Tuple[Group, ...]:
    """Return the 9 row, 9 column and 9 box groups referencing ``grid``."""

    return tuple(Group(kind, number, indices, grid) for kind, number, indices in GROUP_LAYOUT)


def clone(grid: Grid) -> Grid:
    return Grid([cell.clone() for cell in grid])


def equals(left: Grid, right: Grid) -> bool:
    """Compare two grids cell by cell, ignoring candidate order."""

    return all(a == b for a, b in zip(left, right))


def is_solved(grid: Grid) -> bool:
    return all(len(cell) == 1 for cell in grid)


def values(grid: Grid) -> Tuple[int, ...]:
    """Return each cell's value, or ``0`` when it is not determined."""

    return tuple(cell.first() if len(cell) == 1 else 0 for cell in grid)


def empty_cells(grid: Grid) -> Tuple[int, ...]:
    return tuple(index for index, cell in enumerate(grid) if len(cell) == 0)


def candidate_count(grid: Grid) -> int:
    return sum(len(cell) for cell in grid)


def format_candidates(grid: Grid) -> str:
    return "|".join("".join(str(digit) for digit in cell) for cell in grid)


def state_digest(grid: Grid) -> str:
    """Return a stable ``sha256-`` digest of the full candidate state."""

    digest = hashlib.sha256(format_candidates(grid).encode("ascii")).hexdigest()
    return f"sha256-{digest}"


__all__ = [
    "DIGITS",
    "GRID_SIZE",
    "GROUP_LAYOUT",
    "Cell",
    "Grid",
    "Group",
    "PuzzleValue",
    "build",
    "candidate_count",
    "clone",
    "empty_cells",
    "equals",
    "format_candidates",
    "groups",
    "is_solved",
    "state_digest",
    "values",
]
