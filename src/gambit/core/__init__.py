"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import Board, AuxState, Square, legal_destinations

    board = Board.initial()
    legal_destinations(Square(6, 4), board, AuxState())
    # frozenset({Square(row=5, col=4), Square(row=4, col=4)})
"""

from gambit.core.aux_state import AuxState
from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameResult, PieceType
from gambit.core.move import Move
from gambit.core.notation import (
    STARTING_FEN,
    FenRecord,
    build_fen,
    encode_move,
    parse_fen,
)
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.special_moves import (
    can_castle,
    execute_castling,
    execute_en_passant,
    execute_promotion,
    is_castling,
    is_en_passant,
    is_promotion,
    update_castling_rights,
    update_en_passant_target,
)
from gambit.core.types import Square, on_board, parse_square, square_name
from gambit.core.validator import (
    is_in_check,
    is_legal_move,
    is_pseudo_legal_move,
    is_square_attacked,
    legal_destinations,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "AuxState",
    "Board",
    "Move",
    "Piece",
    "Rules",
    # Validation
    "is_in_check",
    "is_legal_move",
    "is_pseudo_legal_move",
    "is_square_attacked",
    "legal_destinations",
    # Special moves
    "can_castle",
    "execute_castling",
    "execute_en_passant",
    "execute_promotion",
    "is_castling",
    "is_en_passant",
    "is_promotion",
    "update_castling_rights",
    "update_en_passant_target",
    # Notation
    "STARTING_FEN",
    "FenRecord",
    "build_fen",
    "encode_move",
    "parse_fen",
]
