"""Castling, en passant and promotion: classification, execution, bookkeeping.

The predicates look at move shape and auxiliary state and reject squares
off the board. Execution helpers assume the caller has already validated
the move and always return a fresh :class:`Board`.
"""

from __future__ import annotations

from gambit.core.aux_state import AuxState
from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, on_board

KING_HOME_COL = 4
KINGSIDE_ROOK_COL = 7
QUEENSIDE_ROOK_COL = 0

# Rook starting corner → the single right it carries.
ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(7, QUEENSIDE_ROOK_COL): CastlingRights.WHITE_QUEENSIDE,
    Square(7, KINGSIDE_ROOK_COL): CastlingRights.WHITE_KINGSIDE,
    Square(0, QUEENSIDE_ROOK_COL): CastlingRights.BLACK_QUEENSIDE,
    Square(0, KINGSIDE_ROOK_COL): CastlingRights.BLACK_KINGSIDE,
}


# ── Classification ───────────────────────────────────────────────────────────


def is_castling(from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    """A king moving exactly two files along its row."""
    if piece.piece_type != PieceType.KING:
        return False
    if not (on_board(*from_sq) and on_board(*to_sq)):
        return False
    from_sq, to_sq = Square(*from_sq), Square(*to_sq)
    return from_sq.row == to_sq.row and abs(from_sq.col - to_sq.col) == 2


def is_en_passant(
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    aux: AuxState | None,
    board: Board | None = None,
) -> bool:
    """A pawn stepping one file diagonally forward onto the en-passant target.

    With *board* given, an occupied target is an ordinary capture instead.
    """
    if piece.piece_type != PieceType.PAWN:
        return False
    if aux is None or aux.en_passant is None:
        return False
    if not (on_board(*from_sq) and on_board(*to_sq)):
        return False
    from_sq, to_sq = Square(*from_sq), Square(*to_sq)
    if board is not None and not board.is_empty(to_sq):
        return False
    return (
        abs(from_sq.col - to_sq.col) == 1
        and to_sq.row == from_sq.row + piece.color.forward
        and to_sq == aux.en_passant
    )


def is_promotion(from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    """A pawn reaching the farthest row for its color."""
    if piece.piece_type != PieceType.PAWN:
        return False
    if not (on_board(*from_sq) and on_board(*to_sq)):
        return False
    return Square(*to_sq).row == piece.color.promotion_row


def castling_right(from_sq: Square, to_sq: Square, piece: Piece) -> CastlingRights:
    """The right a castling attempt needs, or ``NONE`` for any other move."""
    if not is_castling(from_sq, to_sq, piece):
        return CastlingRights.NONE
    from_sq, to_sq = Square(*from_sq), Square(*to_sq)
    color = piece.color
    if from_sq != Square(color.back_row, KING_HOME_COL):
        return CastlingRights.NONE
    if to_sq.col == KING_HOME_COL + 2:
        return CastlingRights.kingside(color)
    return CastlingRights.queenside(color)


def castling_rook_squares(from_sq: Square, to_sq: Square) -> tuple[Square, Square]:
    """(rook origin, rook destination) for a castling king move."""
    row = from_sq.row
    if to_sq.col > from_sq.col:
        return Square(row, KINGSIDE_ROOK_COL), Square(row, to_sq.col - 1)
    return Square(row, QUEENSIDE_ROOK_COL), Square(row, to_sq.col + 1)


def can_castle(
    board: Board, from_sq: Square, to_sq: Square, aux: AuxState | None
) -> bool:
    """Occupancy and rights precondition for castling.

    The king must sit on its original square with the matching right still
    held, every square strictly between king and rook must be empty, and a
    same-color rook must stand on the corner. Attacked squares are not
    considered here; see :func:`gambit.core.validator.is_legal_move`.
    """
    if aux is None:
        return False
    king = board[from_sq]
    if king is None:
        return False
    right = castling_right(from_sq, to_sq, king)
    if right == CastlingRights.NONE or not aux.castling & right:
        return False

    rook_from, _ = castling_rook_squares(from_sq, to_sq)
    rook = board[rook_from]
    if rook is None or rook != Piece(king.color, PieceType.ROOK):
        return False

    lo, hi = sorted((from_sq.col, rook_from.col))
    return all(board.is_empty(Square(from_sq.row, col)) for col in range(lo + 1, hi))


# ── Execution ────────────────────────────────────────────────────────────────


def execute_castling(board: Board, from_sq: Square, to_sq: Square) -> Board:
    """Move king and rook together in one new board."""
    king = board[from_sq]
    if king is None:
        raise ValueError(f"No king on {from_sq}")
    rook_from, rook_to = castling_rook_squares(from_sq, to_sq)
    rook = board[rook_from]
    if rook is None:
        raise ValueError(f"No rook on {rook_from}")
    return board.replace(
        {from_sq: None, rook_from: None, to_sq: king, rook_to: rook}
    )


def en_passant_victim_square(to_sq: Square, color: Color) -> Square:
    """Square of the pawn captured en passant: one rank behind *to_sq*."""
    return Square(to_sq.row - color.forward, to_sq.col)


def execute_en_passant(
    board: Board, from_sq: Square, to_sq: Square, piece: Piece
) -> tuple[Board, Piece | None]:
    """Move the pawn and remove the pawn it passes; return the captured piece."""
    victim_sq = en_passant_victim_square(to_sq, piece.color)
    captured = board[victim_sq]
    new_board = board.replace({from_sq: None, victim_sq: None, to_sq: piece})
    return new_board, captured


def execute_promotion(
    board: Board, from_sq: Square, to_sq: Square, promoted_to: PieceType
) -> Board:
    pawn = board[from_sq]
    if pawn is None:
        raise ValueError(f"No pawn on {from_sq}")
    return board.move_piece(from_sq, to_sq, pawn.promoted(promoted_to))


# ── Bookkeeping ──────────────────────────────────────────────────────────────


def update_castling_rights(rights: CastlingRights, move: Move) -> CastlingRights:
    """Rights after *move*; bits are only ever cleared."""
    piece = move.piece
    if piece.piece_type == PieceType.KING:
        rights &= ~CastlingRights.both(piece.color)

    if piece.piece_type == PieceType.ROOK and move.from_sq in ROOK_CORNERS:
        corner_right = ROOK_CORNERS[move.from_sq]
        if corner_right & CastlingRights.both(piece.color):
            rights &= ~corner_right

    # A rook captured on its corner can no longer castle.
    captured = move.captured
    if (
        captured is not None
        and captured.piece_type == PieceType.ROOK
        and move.to_sq in ROOK_CORNERS
    ):
        corner_right = ROOK_CORNERS[move.to_sq]
        if corner_right & CastlingRights.both(captured.color):
            rights &= ~corner_right

    return rights


def update_en_passant_target(move: Move) -> Square | None:
    """Passed-over square after a double pawn push; None otherwise."""
    if not move.is_double_pawn_push:
        return None
    return Square((move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col)
