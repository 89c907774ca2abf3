"""Game management layer — immutable state, transitions, session owner.

Quick start::

    from gambit.game import GameSession
    from gambit.core import Square

    session = GameSession()
    session.select(Square(6, 4))
    session.select(Square(4, 4))
    session.state.history[-1].notation  # 'e4'
"""

from gambit.game.interfaces import GameOptions, GamePhase, Player
from gambit.game.manager import (
    InvalidPromotionError,
    apply_move,
    cancel_promotion,
    choose_promotion,
    create_initial_state,
    flip_board_view,
    legal_moves_from,
    new_game,
    select_square,
    state_from_fen,
    state_to_fen,
)
from gambit.game.session import GameEvents, GameSession
from gambit.game.state import CapturedPieces, GameState, PendingPromotion

__all__ = [
    # Values
    "CapturedPieces",
    "GameOptions",
    "GamePhase",
    "GameState",
    "PendingPromotion",
    "Player",
    # Transitions
    "InvalidPromotionError",
    "apply_move",
    "cancel_promotion",
    "choose_promotion",
    "create_initial_state",
    "flip_board_view",
    "legal_moves_from",
    "new_game",
    "select_square",
    "state_from_fen",
    "state_to_fen",
    # Session
    "GameEvents",
    "GameSession",
]
