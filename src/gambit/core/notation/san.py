"""Short algebraic move notation (no disambiguation, no check suffix)."""

from __future__ import annotations

from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import FILES, Square, square_name

EN_PASSANT_SUFFIX = " e.p."


def encode_move(
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    captured: Piece | None = None,
    *,
    is_castling: bool = False,
    is_en_passant: bool = False,
    is_promotion: bool = False,
    promoted_to: PieceType | None = None,
) -> str:
    """Render a completed move, e.g. ``e4``, ``Nxf7``, ``exd6 e.p.``, ``e8=Q``.

    Two same-type pieces able to reach the same square are not
    disambiguated: both render as ``Nd2``.
    """
    if is_castling:
        return "O-O" if to_sq.col > from_sq.col else "O-O-O"

    san = piece.piece_type.letter

    if captured is not None or is_en_passant:
        if piece.piece_type == PieceType.PAWN:
            san += FILES[from_sq.col]
        san += "x"

    san += square_name(to_sq)

    if is_en_passant:
        san += EN_PASSANT_SUFFIX

    if is_promotion:
        if promoted_to is None:
            raise ValueError("Promotion notation needs the promoted piece type")
        san += "=" + promoted_to.letter

    return san
