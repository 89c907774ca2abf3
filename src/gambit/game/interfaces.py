"""Game-layer value types: state-machine phases, players and options."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto

from gambit.core.enums import Color

DEFAULT_RATING = 1200


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Per-ply selection / promotion states of a game."""

    IDLE = auto()
    SELECTED = auto()
    PROMOTION_PENDING = auto()
    GAME_OVER = auto()


# ── Players / options ───────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Player:
    """A game participant as shown next to the board."""

    name: str
    color: Color
    rating: int | None = DEFAULT_RATING


def _default_white() -> Player:
    return Player("White Player", Color.WHITE)


def _default_black() -> Player:
    return Player("Black Player", Color.BLACK)


@dataclass(frozen=True, slots=True)
class GameOptions:
    """Immutable per-game configuration.

    Args:
        enforce_king_safety: Reject moves that leave the mover's king in
            check and detect check / checkmate / stalemate. When off, only
            movement shape and occupancy are validated and the check flags
            stay unset.
        white: White's player card.
        black: Black's player card.
    """

    enforce_king_safety: bool = True
    white: Player = field(default_factory=_default_white)
    black: Player = field(default_factory=_default_black)

    def __post_init__(self) -> None:
        if self.white.color != Color.WHITE or self.black.color != Color.BLACK:
            raise ValueError("Player colors do not match their seats")

    # Presets
    @classmethod
    def standard(cls) -> GameOptions:
        return cls()

    @classmethod
    def pseudo_legal(cls) -> GameOptions:
        """Movement rules only; kings may be left en prise."""
        return cls(enforce_king_safety=False)

    def player(self, color: Color) -> Player:
        return self.white if color == Color.WHITE else self.black
