"""Move legality: per-piece movement rules, attack detection, king safety."""

from __future__ import annotations

from gambit.core.aux_state import AuxState
from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.special_moves import (
    can_castle,
    execute_castling,
    execute_en_passant,
    is_castling,
    is_en_passant,
)
from gambit.core.types import Square, all_squares, on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

_SLIDERS_BY_DIR: tuple[tuple[tuple[tuple[int, int], ...], frozenset[PieceType]], ...] = (
    (BISHOP_DIRS, frozenset({PieceType.BISHOP, PieceType.QUEEN})),
    (ROOK_DIRS, frozenset({PieceType.ROOK, PieceType.QUEEN})),
)


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


# -- Pseudo-legality -------------------------------------------------------


def is_pseudo_legal_move(
    from_sq: Square, to_sq: Square, board: Board, aux: AuxState | None = None
) -> bool:
    """Movement shape and occupancy only; king safety is not considered."""
    if not (on_board(*from_sq) and on_board(*to_sq)):
        return False
    from_sq, to_sq = Square(*from_sq), Square(*to_sq)
    if from_sq == to_sq:
        return False

    piece = board[from_sq]
    if piece is None:
        return False
    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False

    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        return _pawn_move(from_sq, to_sq, piece, board, aux)
    if ptype == PieceType.KNIGHT:
        return _knight_move(from_sq, to_sq)
    if ptype == PieceType.BISHOP:
        return _bishop_move(from_sq, to_sq, board)
    if ptype == PieceType.ROOK:
        return _rook_move(from_sq, to_sq, board)
    if ptype == PieceType.QUEEN:
        return _rook_move(from_sq, to_sq, board) or _bishop_move(from_sq, to_sq, board)
    return _king_move(from_sq, to_sq, board, aux)


def _pawn_move(
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    board: Board,
    aux: AuxState | None,
) -> bool:
    step = piece.color.forward
    d_row = to_sq.row - from_sq.row
    d_col = to_sq.col - from_sq.col

    if d_col == 0:
        if d_row == step:
            return board.is_empty(to_sq)
        if d_row == 2 * step and from_sq.row == piece.color.pawn_row:
            return board.is_empty(from_sq.offset(step, 0)) and board.is_empty(to_sq)
        return False

    if abs(d_col) == 1 and d_row == step:
        if board[to_sq] is not None:
            return True
        return aux is not None and aux.en_passant == to_sq
    return False


def _knight_move(from_sq: Square, to_sq: Square) -> bool:
    return (to_sq.row - from_sq.row, to_sq.col - from_sq.col) in KNIGHT_OFFSETS


def _path_clear(from_sq: Square, to_sq: Square, board: Board) -> bool:
    """Every square strictly between the endpoints is empty."""
    d_row = _sign(to_sq.row - from_sq.row)
    d_col = _sign(to_sq.col - from_sq.col)
    sq = from_sq.offset(d_row, d_col)
    while sq != to_sq:
        if not board.is_empty(sq):
            return False
        sq = sq.offset(d_row, d_col)
    return True


def _rook_move(from_sq: Square, to_sq: Square, board: Board) -> bool:
    if from_sq.row != to_sq.row and from_sq.col != to_sq.col:
        return False
    return _path_clear(from_sq, to_sq, board)


def _bishop_move(from_sq: Square, to_sq: Square, board: Board) -> bool:
    if abs(to_sq.row - from_sq.row) != abs(to_sq.col - from_sq.col):
        return False
    return _path_clear(from_sq, to_sq, board)


def _king_move(
    from_sq: Square, to_sq: Square, board: Board, aux: AuxState | None
) -> bool:
    if (to_sq.row - from_sq.row, to_sq.col - from_sq.col) in KING_OFFSETS:
        return True
    return can_castle(board, from_sq, to_sq, aux)


# -- Attack detection ------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Pawns attack diagonally only; sliding attacks stop at the first piece.
    """
    # A pawn of by_color attacks sq from one row "behind" it.
    pawn_row = sq.row - by_color.forward
    for d_col in (-1, 1):
        if on_board(pawn_row, sq.col + d_col):
            piece = board[Square(pawn_row, sq.col + d_col)]
            if piece == Piece(by_color, PieceType.PAWN):
                return True

    for offsets, ptype in (
        (KNIGHT_OFFSETS, PieceType.KNIGHT),
        (KING_OFFSETS, PieceType.KING),
    ):
        for d_row, d_col in offsets:
            if on_board(sq.row + d_row, sq.col + d_col):
                piece = board[sq.offset(d_row, d_col)]
                if piece == Piece(by_color, ptype):
                    return True

    for dirs, attackers in _SLIDERS_BY_DIR:
        for d_row, d_col in dirs:
            row, col = sq.row + d_row, sq.col + d_col
            while on_board(row, col):
                piece = board[Square(row, col)]
                if piece is not None:
                    if piece.color == by_color and piece.piece_type in attackers:
                        return True
                    break
                row += d_row
                col += d_col

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? A missing king is never in check."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


# -- Full legality ---------------------------------------------------------


def board_after(
    from_sq: Square, to_sq: Square, board: Board, aux: AuxState | None = None
) -> Board:
    """Board resulting from a pseudo-legal move (promotion type ignored)."""
    piece = board[from_sq]
    if piece is None:
        raise ValueError(f"No piece on {from_sq}")
    if is_castling(from_sq, to_sq, piece):
        return execute_castling(board, from_sq, to_sq)
    if is_en_passant(from_sq, to_sq, piece, aux, board):
        new_board, _ = execute_en_passant(board, from_sq, to_sq, piece)
        return new_board
    return board.move_piece(from_sq, to_sq)


def is_legal_move(
    from_sq: Square,
    to_sq: Square,
    board: Board,
    aux: AuxState | None = None,
    *,
    king_safety: bool = True,
) -> bool:
    """Pseudo-legal and, with *king_safety*, not leaving the mover in check.

    Castling also requires the king not to start in check nor pass over an
    attacked square.
    """
    if not is_pseudo_legal_move(from_sq, to_sq, board, aux):
        return False
    if not king_safety:
        return True

    from_sq, to_sq = Square(*from_sq), Square(*to_sq)
    piece = board[from_sq]
    assert piece is not None
    color = piece.color

    if is_castling(from_sq, to_sq, piece):
        enemy = color.opposite
        passed = Square(from_sq.row, (from_sq.col + to_sq.col) // 2)
        if is_square_attacked(board, from_sq, enemy):
            return False
        if is_square_attacked(board, passed, enemy):
            return False

    return not is_in_check(board_after(from_sq, to_sq, board, aux), color)


def legal_destinations(
    from_sq: Square,
    board: Board,
    aux: AuxState | None = None,
    *,
    king_safety: bool = True,
) -> frozenset[Square]:
    """Every square the piece on *from_sq* may move to (64-square scan)."""
    if not on_board(*from_sq) or board[Square(*from_sq)] is None:
        return frozenset()
    return frozenset(
        to_sq
        for to_sq in all_squares()
        if is_legal_move(from_sq, to_sq, board, aux, king_safety=king_safety)
    )


def has_legal_move(
    board: Board,
    color: Color,
    aux: AuxState | None = None,
    *,
    king_safety: bool = True,
) -> bool:
    """Whether any piece of *color* has at least one legal destination."""
    for from_sq in board.pieces(color):
        for to_sq in all_squares():
            if is_legal_move(from_sq, to_sq, board, aux, king_safety=king_safety):
                return True
    return False
