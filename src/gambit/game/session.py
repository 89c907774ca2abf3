"""GameSession — the single authoritative owner of one game's state.

Wraps the pure transitions in :mod:`gambit.game.manager`, serializes
incoming requests and notifies listeners via simple callbacks so the UI /
tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from gambit.core.enums import GameResult, PieceType
from gambit.core.move import Move
from gambit.core.types import Square
from gambit.game import manager
from gambit.game.interfaces import GameOptions
from gambit.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

StateCallback = Callable[[GameState], None]
MoveCallback = Callable[[Move, GameState], None]  # move, state after
GameOverCallback = Callable[[GameResult], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_state_changed: list[StateCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Holds the current :class:`GameState` and applies requests one at a time.

    Every request method returns ``True`` when the state changed and
    ``False`` when the action was rejected. Listeners run while the session
    lock is held and may call back into the session. A commit made from a
    listener is only queued; its events fire after those of the commit that
    triggered it, so every listener sees events in commit order.
    """

    __slots__ = ("_state", "_lock", "_queue", "_draining", "events")

    def __init__(self, options: GameOptions | None = None) -> None:
        self._state = manager.create_initial_state(options)
        self._lock = threading.RLock()
        self._queue: deque[Callable[[], None]] = deque()
        self._draining = False
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def options(self) -> GameOptions:
        return self._state.options

    # ── Requests ─────────────────────────────────────────────────────────

    def select(self, square: Square) -> bool:
        return self._update(lambda s: manager.select_square(s, square))

    def move(self, from_sq: Square, to_sq: Square) -> bool:
        return self._update(lambda s: manager.apply_move(s, from_sq, to_sq))

    def promote(self, piece_type: PieceType) -> bool:
        """Raises :class:`~gambit.game.manager.InvalidPromotionError` for pawn/king."""
        return self._update(lambda s: manager.choose_promotion(s, piece_type))

    def cancel_promotion(self) -> bool:
        return self._update(manager.cancel_promotion)

    def flip_board(self) -> bool:
        return self._update(manager.flip_board_view)

    def new_game(self, options: GameOptions | None = None) -> None:
        if options is None:
            self._update(manager.new_game)
        else:
            self._update(lambda s: manager.create_initial_state(options))

    def load_fen(self, fen: str) -> None:
        """Replace the game with the position *fen* (raises ValueError if bad)."""
        self._update(lambda s: manager.state_from_fen(fen, s.options))

    # ── Internal ─────────────────────────────────────────────────────────

    def _update(self, transition: Callable[[GameState], GameState]) -> bool:
        with self._lock:
            before = self._state
            after = transition(before)
            if after is before:
                return False
            self._state = after

            self._queue.append(partial(self._emit_state, after))
            if len(after.history) > len(before.history) and after.last_move is not None:
                self._queue.append(partial(self._emit_move, after.last_move, after))
            if after.game_over and not before.game_over:
                self._queue.append(partial(self._emit_game_over, after.result))
            self._drain()
            return True

    def _drain(self) -> None:
        # Re-entrant commits only enqueue; the outermost call delivers.
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                self._queue.popleft()()
        finally:
            self._draining = False
            self._queue.clear()

    def _emit_state(self, state: GameState) -> None:
        for cb in self.events.on_state_changed:
            cb(state)

    def _emit_move(self, move: Move, state: GameState) -> None:
        _LOGGER.debug("Move %d: %s", state.ply_count, move.notation)
        for cb in self.events.on_move:
            cb(move, state)

    def _emit_game_over(self, result: GameResult) -> None:
        _LOGGER.info("Game finished: %s", result.name)
        for cb in self.events.on_game_over:
            cb(result)
