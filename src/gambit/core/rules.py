"""High-level chess rules: check, checkmate, stalemate, game result."""

from __future__ import annotations

from gambit.core.aux_state import AuxState
from gambit.core.board import Board
from gambit.core.enums import Color, GameResult
from gambit.core.validator import has_legal_move, is_in_check


class Rules:
    """Static rule-checker over a board, the side to move and aux state."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return is_in_check(board, color)

    @staticmethod
    def is_checkmate(board: Board, color: Color, aux: AuxState | None = None) -> bool:
        if not is_in_check(board, color):
            return False
        return not has_legal_move(board, color, aux)

    @staticmethod
    def is_stalemate(board: Board, color: Color, aux: AuxState | None = None) -> bool:
        if is_in_check(board, color):
            return False
        return not has_legal_move(board, color, aux)

    @staticmethod
    def game_result(
        board: Board, side_to_move: Color, aux: AuxState | None = None
    ) -> GameResult:
        """Determine the current game result for *side_to_move*."""
        if has_legal_move(board, side_to_move, aux):
            return GameResult.IN_PROGRESS
        if is_in_check(board, side_to_move):
            return (
                GameResult.BLACK_WINS
                if side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
