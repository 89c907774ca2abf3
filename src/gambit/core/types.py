"""Square type and coordinate helpers.

Board layout (row, col), White at the bottom:
    row 0 = rank 8 (Black's back rank), row 7 = rank 1 (White's back rank)
    col 0 = file a, col 7 = file h

So ``Square(6, 4)`` is e2 and ``Square(0, 4)`` is e8.
"""

from __future__ import annotations

from typing import NamedTuple

FILES = "abcdefgh"
RANKS = "87654321"


class Square(NamedTuple):
    """A (row, col) coordinate pair. Equality is structural."""

    row: int
    col: int

    @property
    def on_board(self) -> bool:
        return on_board(self.row, self.col)

    def offset(self, d_row: int, d_col: int) -> Square:
        """Square shifted by a delta (may land off the board)."""
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return square_name(self) if self.on_board else f"({self.row}, {self.col})"


def on_board(row: int, col: int) -> bool:
    """Bounds check: 0 <= row, col < 8."""
    return 0 <= row < 8 and 0 <= col < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. Square(6, 4) → 'e2'."""
    if not sq.on_board:
        raise ValueError(f"Square off the board: {tuple(sq)!r}")
    return FILES[sq.col] + RANKS[sq.row]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 4)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(RANKS.index(name[1]), FILES.index(name[0]))


def all_squares() -> tuple[Square, ...]:
    """All 64 squares in row-major order."""
    return _ALL_SQUARES


_ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(8) for col in range(8)
)
