"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType


def _fen_char(color: Color, piece_type: PieceType) -> str:
    char = piece_type.letter or "P"
    return char if color == Color.WHITE else char.lower()


# FEN character <-> (Color, PieceType), uppercase for White.
_FEN_CHARS: dict[tuple[Color, PieceType], str] = {
    (color, ptype): _fen_char(color, ptype) for color in Color for ptype in PieceType
}
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {v: k for k, v in _FEN_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece; equal pieces are interchangeable."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character, e.g. 'N' for a white knight, 'q' for a black queen."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    def promoted(self, piece_type: PieceType) -> Piece:
        """Same-color piece of another type."""
        return Piece(self.color, piece_type)
