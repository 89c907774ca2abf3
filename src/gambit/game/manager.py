"""Game-state transitions: selection, move commit, deferred promotion.

Every function takes a :class:`GameState` and returns the next one. A
rejected action returns the very same object, so callers detect rejection
with ``new is old``.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from gambit.core.enums import Color, GameResult, PieceType
from gambit.core.move import Move
from gambit.core.notation import encode_move
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.special_moves import (
    execute_castling,
    execute_en_passant,
    execute_promotion,
    is_castling,
    is_en_passant,
    is_promotion,
    update_castling_rights,
    update_en_passant_target,
)
from gambit.core.types import Square, on_board
from gambit.core.validator import is_legal_move, legal_destinations
from gambit.game.interfaces import GameOptions
from gambit.game.state import GameState, PendingPromotion

_LOGGER = logging.getLogger(__name__)


class InvalidPromotionError(ValueError):
    """A pawn may only promote to a knight, bishop, rook or queen."""

    def __init__(self, piece_type: object) -> None:
        super().__init__(f"Cannot promote to {piece_type}")
        self.piece_type = piece_type


# ── Construction ─────────────────────────────────────────────────────────────


def create_initial_state(options: GameOptions | None = None) -> GameState:
    return GameState.initial(options)


def new_game(state: GameState | None = None) -> GameState:
    """Fresh game; keeps *state*'s options and board orientation."""
    if state is None:
        return create_initial_state()
    _LOGGER.info("New game")
    return replace(
        GameState.initial(state.options), board_flipped=state.board_flipped
    )


def state_from_fen(fen: str, options: GameOptions | None = None) -> GameState:
    """Game starting from an arbitrary FEN position."""
    state = GameState.from_fen(fen, options)
    if not state.king_safety:
        return state
    return _with_status(state)


def state_to_fen(state: GameState) -> str:
    return state.to_fen()


def flip_board_view(state: GameState) -> GameState:
    """Toggle the presentation-only orientation flag."""
    return replace(state, board_flipped=not state.board_flipped)


# ── Selection ────────────────────────────────────────────────────────────────


def legal_moves_from(state: GameState, square: Square) -> frozenset[Square]:
    return legal_destinations(
        square, state.board, state.aux, king_safety=state.king_safety
    )


def _clear_selection(state: GameState) -> GameState:
    if state.selected_square is None and not state.legal_moves:
        return state
    return replace(state, selected_square=None, legal_moves=frozenset())


def select_square(state: GameState, square: Square) -> GameState:
    """Click-style interaction: select, reselect, deselect or move."""
    if state.game_over or state.pending_promotion is not None:
        return state
    if not on_board(*square):
        _LOGGER.debug("Ignoring off-board selection %r", square)
        return state
    square = Square(*square)

    selected = state.selected_square
    if selected is not None:
        if square == selected:
            return _clear_selection(state)
        if square in state.legal_moves:
            return apply_move(state, selected, square)

    piece = state.board[square]
    if piece is not None and piece.color == state.current_player:
        return replace(
            state,
            selected_square=square,
            legal_moves=legal_moves_from(state, square),
        )
    return _clear_selection(state)


# ── Moves ────────────────────────────────────────────────────────────────────


def apply_move(state: GameState, from_sq: Square, to_sq: Square) -> GameState:
    """Commit a legal move, or enter PromotionPending for a promoting pawn."""
    if state.game_over or state.pending_promotion is not None:
        _LOGGER.debug("Move rejected in phase %s", state.phase.name)
        return state
    if not (on_board(*from_sq) and on_board(*to_sq)):
        _LOGGER.debug("Move rejected: off-board %r -> %r", from_sq, to_sq)
        return state
    from_sq, to_sq = Square(*from_sq), Square(*to_sq)

    piece = state.board[from_sq]
    if piece is None or piece.color != state.current_player:
        _LOGGER.debug("Move rejected: no %s piece on %s", state.current_player, from_sq)
        return state
    if not is_legal_move(
        from_sq, to_sq, state.board, state.aux, king_safety=state.king_safety
    ):
        _LOGGER.debug("Move rejected: %s %s -> %s is illegal", piece, from_sq, to_sq)
        return state

    if is_promotion(from_sq, to_sq, piece):
        return replace(
            state,
            selected_square=from_sq,
            legal_moves=frozenset(),
            pending_promotion=PendingPromotion(to_sq, piece.color, from_sq),
        )
    return _commit(state, from_sq, to_sq, piece)


def choose_promotion(state: GameState, piece_type: PieceType) -> GameState:
    """Complete the pending promotion with *piece_type*.

    Raises:
        InvalidPromotionError: *piece_type* is a pawn or king; the pending
            promotion is kept.
    """
    pending = state.pending_promotion
    if not isinstance(piece_type, PieceType) or not piece_type.is_promotion_choice:
        raise InvalidPromotionError(piece_type)
    if pending is None:
        _LOGGER.debug("No promotion pending")
        return state
    pawn = state.board[pending.origin]
    if pawn is None:
        raise ValueError(f"Pending promotion has no pawn on {pending.origin}")
    return _commit(state, pending.origin, pending.square, pawn, piece_type)


def cancel_promotion(state: GameState) -> GameState:
    """Abandon the pending promotion; the board is untouched."""
    if state.pending_promotion is None:
        return state
    return replace(
        state,
        pending_promotion=None,
        selected_square=None,
        legal_moves=frozenset(),
    )


def _commit(
    state: GameState,
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    promoted_to: PieceType | None = None,
) -> GameState:
    board = state.board
    captured = board[to_sq]

    castling = is_castling(from_sq, to_sq, piece)
    en_passant = is_en_passant(from_sq, to_sq, piece, state.aux, board)

    if castling:
        new_board = execute_castling(board, from_sq, to_sq)
    elif en_passant:
        new_board, captured = execute_en_passant(board, from_sq, to_sq, piece)
    elif promoted_to is not None:
        new_board = execute_promotion(board, from_sq, to_sq, promoted_to)
    else:
        new_board = board.move_piece(from_sq, to_sq)

    captured_pieces = state.captured
    if captured is not None:
        captured_pieces = captured_pieces.add(piece.color, captured)

    notation = encode_move(
        from_sq,
        to_sq,
        piece,
        captured,
        is_castling=castling,
        is_en_passant=en_passant,
        is_promotion=promoted_to is not None,
        promoted_to=promoted_to,
    )
    move = Move(
        from_sq=from_sq,
        to_sq=to_sq,
        piece=piece,
        captured=captured,
        notation=notation,
        is_castling=castling,
        is_en_passant=en_passant,
        is_promotion=promoted_to is not None,
        promoted_to=promoted_to,
    )

    next_player = state.current_player.opposite
    reset_clock = piece.piece_type == PieceType.PAWN or captured is not None
    next_state = replace(
        state,
        board=new_board,
        current_player=next_player,
        selected_square=None,
        legal_moves=frozenset(),
        history=state.history + (move,),
        captured=captured_pieces,
        castling=update_castling_rights(state.castling, move),
        en_passant=update_en_passant_target(move),
        pending_promotion=None,
        halfmove_clock=0 if reset_clock else state.halfmove_clock + 1,
        fullmove_number=(
            state.fullmove_number + 1
            if piece.color == Color.BLACK
            else state.fullmove_number
        ),
    )
    _LOGGER.debug("Committed %s (%s)", notation, move.uci)

    if not state.king_safety:
        return next_state
    return _with_status(next_state)


def _with_status(state: GameState) -> GameState:
    """Fill in check / mate / stalemate for the side now to move."""
    color = state.current_player
    result = Rules.game_result(state.board, color, state.aux)
    in_check = Rules.is_in_check(state.board, color)
    checkmate = in_check and result != GameResult.IN_PROGRESS
    stalemate = not in_check and result == GameResult.DRAW
    game_over = result != GameResult.IN_PROGRESS
    if game_over:
        _LOGGER.info(
            "Game over: %s (%s)",
            result.name,
            "checkmate" if checkmate else "stalemate",
        )
    return replace(
        state,
        is_check=in_check,
        is_checkmate=checkmate,
        is_stalemate=stalemate,
        game_over=game_over,
        result=result,
    )
