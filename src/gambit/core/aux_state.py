"""Auxiliary rule state: everything besides the board the validator reads."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import CastlingRights
from gambit.core.types import Square


@dataclass(frozen=True, slots=True)
class AuxState:
    """Castling rights plus the one-ply en-passant window."""

    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None

    @classmethod
    def none(cls) -> AuxState:
        """No castling rights, no en-passant target."""
        return cls(CastlingRights.NONE, None)
