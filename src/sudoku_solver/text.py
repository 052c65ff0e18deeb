"""Plain-text puzzle parsing and rendering."""

from __future__ import annotations

from typing import List, Optional, Sequence

_BLANKS = set("0._*")
_IGNORED = set("|-+")


def parse_puzzle(text: str) -> List[Optional[int]]:
    """Parse 81 row-major symbols into digits and ``None`` blanks.

    ``1``-``9`` are givens and any of ``0 . _ *`` is a blank.  Whitespace and
    the grid drawing characters ``| - +`` are skipped, so the output of
    :func:`render_grid` parses back.
    """

    puzzle: List[Optional[int]] = []
    for ch in text:
        if ch.isspace() or ch in _IGNORED:
            continue
        if ch in _BLANKS:
            puzzle.append(None)
        elif "1" <= ch <= "9":
            puzzle.append(int(ch))
        else:
            raise ValueError(f"Unexpected symbol {ch!r} in puzzle")
    if len(puzzle) != 81:
        raise ValueError(f"Puzzle must contain 81 cells, got {len(puzzle)}")
    return puzzle


def format_values(values: Sequence[Optional[int]]) -> str:
    return "".join(str(value or 0) for value in values)


def render_grid(values: Sequence[Optional[int]]) -> str:
    lines = []
    for r in range(9):
        if r % 3 == 0:
            lines.append("+-------+-------+-------+")
        row = []
        for c in range(9):
            v = values[9 * r + c]
            row.append(str(v) if v else ".")
            if c % 3 == 2:
                row.append("|")
        lines.append("| " + " ".join(row))
    lines.append("+-------+-------+-------+")
    return "\n".join(lines)


__all__ = ["format_values", "parse_puzzle", "render_grid"]
