"""Notation package: move notation and FEN parsing / serialization."""

from gambit.core.notation.fen import (
    STARTING_FEN,
    board_from_placement,
    board_to_placement,
    build_fen,
    parse_fen,
)
from gambit.core.notation.models import FenRecord
from gambit.core.notation.san import encode_move

__all__ = [
    "STARTING_FEN",
    "FenRecord",
    "board_from_placement",
    "board_to_placement",
    "build_fen",
    "encode_move",
    "parse_fen",
]
