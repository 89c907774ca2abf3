"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, all_squares, on_board

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    row, col = sq
    if not on_board(row, col):
        raise IndexError(f"Square off the board: {(row, col)!r}")
    return row * 8 + col


class Board:
    """Immutable 64-square board.

    Every mutation helper returns a new :class:`Board`; the receiver is never
    changed, so a board handed to a caller can be kept safely.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: tuple[Piece | None, ...] | None = None) -> None:
        if cells is None:
            cells = (None,) * 64
        if len(cells) != 64:
            raise ValueError(f"Board needs 64 cells, got {len(cells)}")
        self._cells: tuple[Piece | None, ...] = tuple(cells)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._cells[_index(sq)]

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, row-major."""
        for sq, piece in zip(all_squares(), self._cells):
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Square]:
        """Squares occupied by *color* (optionally only *piece_type*)."""
        return [
            sq
            for sq, piece in self
            if piece.color == color
            and (piece_type is None or piece.piece_type == piece_type)
        ]

    def king_square(self, color: Color) -> Square | None:
        """First square holding *color*'s king, or None if it is missing."""
        for sq, piece in self:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    # -- Copy-on-write updates ---------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied in one step."""
        cells = list(self._cells)
        for sq, piece in changes.items():
            cells[_index(sq)] = piece
        return Board(tuple(cells))

    def move_piece(
        self, from_sq: Square, to_sq: Square, placed: Piece | None = None
    ) -> Board:
        """Relocate the piece on *from_sq*, optionally substituting *placed*."""
        piece = self[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")
        return self.replace(
            {from_sq: None, to_sq: placed if placed is not None else piece}
        )

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (Black on rows 0-1, White on rows 6-7)."""
        changes: dict[Square, Piece | None] = {}
        for col, pt in enumerate(_BACK_RANK):
            changes[Square(0, col)] = Piece(Color.BLACK, pt)
            changes[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            changes[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            changes[Square(7, col)] = Piece(Color.WHITE, pt)
        return cls.empty().replace(changes)

    @classmethod
    def from_pieces(cls, placement: Mapping[Square, Piece]) -> Board:
        """Board holding exactly *placement*."""
        return cls.empty().replace(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            line = []
            for col in range(8):
                p = self[Square(row, col)]
                line.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(line)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
