"""FEN parsing and serialisation.

Placement is written rank 8 first, which is row 0 of :class:`Board`.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color
from gambit.core.notation.models import FenRecord
from gambit.core.piece import Piece
from gambit.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

# Row of a valid en-passant target, keyed by the side to move.
_EP_ROW: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 5}


def board_from_placement(placement: str) -> Board:
    """Parse the piece-placement field into a :class:`Board`."""
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    pieces: dict[Square, Piece] = {}
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {placement!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"FEN rank overflow: {rank_text!r}")
                pieces[Square(row, col)] = Piece.from_char(ch)
                col += 1
        if col != 8:
            raise ValueError(f"FEN rank must cover 8 files: {rank_text!r}")
    return Board.from_pieces(pieces)


def board_to_placement(board: Board) -> str:
    ranks: list[str] = []
    for row in range(8):
        text = ""
        empty = 0
        for col in range(8):
            piece = board[Square(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def parse_fen(fen: str) -> FenRecord:
    """Parse a FEN string; the two clock fields are optional."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = board_from_placement(placement)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid side to move: {side_part!r}")

    castling = CastlingRights.NONE
    if castling_part != "-":
        lookup = dict(_CASTLING_CHARS)
        for ch in castling_part:
            if ch not in lookup:
                raise ValueError(f"Invalid castling field: {castling_part!r}")
            castling |= lookup[ch]

    en_passant = None if ep_part == "-" else parse_square(ep_part)
    # The target sits behind a pawn the opponent just pushed two squares.
    if en_passant is not None and en_passant.row != _EP_ROW[side]:
        raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")

    try:
        halfmove = int(parts[4]) if len(parts) > 4 else 0
        fullmove = int(parts[5]) if len(parts) > 5 else 1
    except ValueError:
        raise ValueError(f"Invalid FEN move counters: {fen!r}") from None
    if halfmove < 0 or fullmove < 1:
        raise ValueError(f"Invalid FEN move counters: {fen!r}")

    return FenRecord(board, side, castling, en_passant, halfmove, fullmove)


def build_fen(record: FenRecord) -> str:
    castling = "".join(ch for ch, flag in _CASTLING_CHARS if record.castling & flag)
    ep = "-" if record.en_passant is None else square_name(record.en_passant)
    side = "w" if record.side_to_move == Color.WHITE else "b"
    return " ".join(
        (
            board_to_placement(record.board),
            side,
            castling or "-",
            ep,
            str(record.halfmove_clock),
            str(record.fullmove_number),
        )
    )
