"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.aux_state import AuxState
from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color
from gambit.core.types import Square


@dataclass(frozen=True, slots=True)
class FenRecord:
    """The six FEN fields, decoded."""

    board: Board
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @property
    def aux(self) -> AuxState:
        return AuxState(self.castling, self.en_passant)
