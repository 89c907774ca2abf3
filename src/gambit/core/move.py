"""Move value object - one committed ply in the game history."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a single committed move."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    notation: str = ""
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    promoted_to: PieceType | None = None
    timestamp: float = field(default_factory=time.time, compare=False)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return self.notation or self.uci

    @property
    def uci(self) -> str:
        """Long-algebraic coordinates, e.g. 'e2e4' or 'e7e8q'."""
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promoted_to is not None:
            base += self.promoted_to.letter.lower()
        return base

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and self.from_sq.col == self.to_sq.col
            and abs(self.from_sq.row - self.to_sq.row) == 2
        )
