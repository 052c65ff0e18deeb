"""Documented example puzzles, one per difficulty level.

level0: at every step at least one cell is determined by elimination alone.
level1: propagation stalls at some step, but assuming one candidate for one
cell lets propagation finish the grid.
level2 or higher: two or more chained assumptions are needed; these are out
of reach for this solver (the level8 example is one of them).
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .text import parse_puzzle

Puzzle = Tuple[Optional[int], ...]

LEVEL0_EXAMPLE: Puzzle = tuple(
    parse_puzzle(
        """
        .6.5..2..
        .98..2..6
        ..7...4.3
        ..1..7.2.
        8..1.9..5
        .7.3..9..
        4.6...8..
        5..7..61.
        ..2..6.9.
        """
    )
)

LEVEL0_SOLUTION: Tuple[int, ...] = tuple(
    int(ch)
    for ch in (
        "164583279"
        "398472156"
        "257961483"
        "941657328"
        "823149765"
        "675328941"
        "416295837"
        "589734612"
        "732816594"
    )
)

LEVEL1_EXAMPLE: Puzzle = tuple(
    parse_puzzle(
        """
        4.5.6178.
        ..84....9
        ..9..3.4.
        8....5..4
        .57.8439.
        9...3...6
        .8.7..4..
        5....69..
        .9354.1.7
        """
    )
)

LEVEL1_SOLUTION: Tuple[int, ...] = tuple(
    int(ch)
    for ch in (
        "425961783"
        "368472519"
        "719853642"
        "831695274"
        "657284391"
        "942137856"
        "186729435"
        "574316928"
        "293548167"
    )
)

LEVEL8_EXAMPLE: Puzzle = tuple(
    parse_puzzle(
        """
        ..53.....
        8......2.
        .7..1.5..
        4....53..
        .1..7...6
        ..32...8.
        .6.5....9
        ..4....3.
        .....97..
        """
    )
)

EXAMPLES: Dict[str, Puzzle] = {
    "level0": LEVEL0_EXAMPLE,
    "level1": LEVEL1_EXAMPLE,
    "level8": LEVEL8_EXAMPLE,
}

__all__ = [
    "EXAMPLES",
    "LEVEL0_EXAMPLE",
    "LEVEL0_SOLUTION",
    "LEVEL1_EXAMPLE",
    "LEVEL1_SOLUTION",
    "LEVEL8_EXAMPLE",
    "Puzzle",
]
