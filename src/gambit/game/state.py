"""GameState — the immutable snapshot every game transition produces."""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.aux_state import AuxState
from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameResult
from gambit.core.move import Move
from gambit.core.notation import FenRecord, build_fen, parse_fen
from gambit.core.piece import Piece
from gambit.core.types import Square
from gambit.game.interfaces import GameOptions, GamePhase, Player


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn has reached the last rank and awaits its new piece type."""

    square: Square
    color: Color
    origin: Square


@dataclass(frozen=True, slots=True)
class CapturedPieces:
    """Pieces taken so far, keyed by the color that captured them."""

    white: tuple[Piece, ...] = ()
    black: tuple[Piece, ...] = ()

    def by(self, color: Color) -> tuple[Piece, ...]:
        return self.white if color == Color.WHITE else self.black

    def add(self, color: Color, piece: Piece) -> CapturedPieces:
        if color == Color.WHITE:
            return CapturedPieces(self.white + (piece,), self.black)
        return CapturedPieces(self.white, self.black + (piece,))


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete game snapshot.

    Never mutated: transitions in :mod:`gambit.game.manager` build a new
    instance with :func:`dataclasses.replace`, so any reference a caller
    holds keeps describing the position it was handed.
    """

    board: Board = field(default_factory=Board.initial)
    current_player: Color = Color.WHITE
    selected_square: Square | None = None
    legal_moves: frozenset[Square] = frozenset()
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    game_over: bool = False
    result: GameResult = GameResult.IN_PROGRESS
    history: tuple[Move, ...] = ()
    captured: CapturedPieces = field(default_factory=CapturedPieces)
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    pending_promotion: PendingPromotion | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    board_flipped: bool = False
    options: GameOptions = field(default_factory=GameOptions)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def initial(cls, options: GameOptions | None = None) -> GameState:
        """Canonical starting layout, White to move."""
        return cls(options=options or GameOptions())

    @classmethod
    def from_fen(cls, fen: str, options: GameOptions | None = None) -> GameState:
        """Snapshot for an arbitrary position (empty history)."""
        record = parse_fen(fen)
        return cls(
            board=record.board,
            current_player=record.side_to_move,
            castling=record.castling,
            en_passant=record.en_passant,
            halfmove_clock=record.halfmove_clock,
            fullmove_number=record.fullmove_number,
            options=options or GameOptions(),
        )

    def to_fen(self) -> str:
        return build_fen(
            FenRecord(
                board=self.board,
                side_to_move=self.current_player,
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                fullmove_number=self.fullmove_number,
            )
        )

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def aux(self) -> AuxState:
        """Castling rights and en-passant target, as the validator wants them."""
        return AuxState(self.castling, self.en_passant)

    @property
    def phase(self) -> GamePhase:
        if self.game_over:
            return GamePhase.GAME_OVER
        if self.pending_promotion is not None:
            return GamePhase.PROMOTION_PENDING
        if self.selected_square is not None:
            return GamePhase.SELECTED
        return GamePhase.IDLE

    @property
    def king_safety(self) -> bool:
        return self.options.enforce_king_safety

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def last_move(self) -> Move | None:
        return self.history[-1] if self.history else None

    @property
    def players(self) -> tuple[Player, Player]:
        return self.options.white, self.options.black

    def captured_by(self, color: Color) -> tuple[Piece, ...]:
        return self.captured.by(color)
