"""Tests for the game-state transitions."""

from dataclasses import FrozenInstanceError, replace

import pytest

from gambit.core.enums import CastlingRights, Color, GameResult, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square
from gambit.game.interfaces import GameOptions, GamePhase
from gambit.game.manager import (
    InvalidPromotionError,
    apply_move,
    cancel_promotion,
    choose_promotion,
    create_initial_state,
    flip_board_view,
    new_game,
    select_square,
    state_from_fen,
    state_to_fen,
)
from gambit.game.state import GameState

P = Piece.from_char
PROMOTION_FEN = "k7/4P3/8/8/8/8/8/7K w - - 0 1"
KINGSIDE_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQK2R w KQkq - 0 1"


def _play(state: GameState, *moves: tuple[tuple[int, int], tuple[int, int]]) -> GameState:
    """Apply moves in order, failing the test if any is rejected."""
    for from_sq, to_sq in moves:
        after = apply_move(state, Square(*from_sq), Square(*to_sq))
        assert after is not state, f"move {from_sq} -> {to_sq} was rejected"
        state = after
    return state


class TestInitialState:
    def test_defaults(self) -> None:
        state = create_initial_state()
        assert state.current_player == Color.WHITE
        assert state.castling == CastlingRights.ALL
        assert state.en_passant is None
        assert state.history == ()
        assert state.captured_by(Color.WHITE) == ()
        assert state.captured_by(Color.BLACK) == ()
        assert state.phase == GamePhase.IDLE
        assert not state.is_check
        assert not state.game_over
        assert state.result == GameResult.IN_PROGRESS

    def test_players(self) -> None:
        white, black = create_initial_state().players
        assert white.name == "White Player"
        assert black.color == Color.BLACK
        assert white.rating == 1200

    def test_frozen(self, initial_state: GameState) -> None:
        with pytest.raises(FrozenInstanceError):
            initial_state.current_player = Color.BLACK  # type: ignore[misc]


class TestApplyMove:
    def test_e4(self, initial_state: GameState) -> None:
        state = apply_move(initial_state, Square(6, 4), Square(4, 4))
        move = state.last_move
        assert move is not None
        assert move.notation == "e4"
        assert move.piece == P("P")
        assert state.en_passant == Square(5, 4)
        assert state.castling == CastlingRights.ALL
        assert state.current_player == Color.BLACK
        assert state.board[Square(4, 4)] == P("P")
        assert state.board[Square(6, 4)] is None

    def test_previous_state_untouched(self, initial_state: GameState) -> None:
        apply_move(initial_state, Square(6, 4), Square(4, 4))
        assert initial_state.board[Square(6, 4)] == P("P")
        assert initial_state.history == ()
        assert initial_state.current_player == Color.WHITE

    def test_illegal_returns_same_state(self, initial_state: GameState) -> None:
        assert apply_move(initial_state, Square(6, 4), Square(3, 4)) is initial_state

    def test_wrong_color_rejected(self, initial_state: GameState) -> None:
        assert apply_move(initial_state, Square(1, 4), Square(3, 4)) is initial_state

    def test_empty_origin_rejected(self, initial_state: GameState) -> None:
        assert apply_move(initial_state, Square(4, 4), Square(3, 4)) is initial_state

    def test_off_board_rejected(self, initial_state: GameState) -> None:
        assert apply_move(initial_state, Square(6, 4), Square(-2, 4)) is initial_state
        assert apply_move(initial_state, Square(9, 9), Square(4, 4)) is initial_state

    def test_clear_selection_after_commit(self, initial_state: GameState) -> None:
        selected = select_square(initial_state, Square(6, 4))
        state = apply_move(selected, Square(6, 4), Square(4, 4))
        assert state.selected_square is None
        assert state.legal_moves == frozenset()

    def test_move_counters_and_fen(self, initial_state: GameState) -> None:
        state = _play(initial_state, ((6, 4), (4, 4)))
        assert state.fullmove_number == 1
        assert state_to_fen(state) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        state = _play(state, ((0, 6), (2, 5)))
        assert state.fullmove_number == 2
        assert state.halfmove_clock == 1

    def test_regular_capture(self) -> None:
        state = state_from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        state = _play(state, ((4, 4), (3, 3)))
        assert state.last_move is not None
        assert state.last_move.notation == "exd5"
        assert state.last_move.captured == P("p")
        assert state.captured_by(Color.WHITE) == (P("p"),)
        assert state.captured_by(Color.BLACK) == ()

    def test_quiet_moves_capture_nothing(self, initial_state: GameState) -> None:
        state = _play(
            initial_state,
            ((7, 6), (5, 5)),
            ((0, 6), (2, 5)),
            ((5, 5), (7, 6)),
            ((2, 5), (0, 6)),
        )
        assert [m.notation for m in state.history] == ["Nf3", "Nf6", "Ng1", "Ng8"]
        assert state.captured_by(Color.WHITE) == ()
        assert state.captured_by(Color.BLACK) == ()
        assert state.castling == CastlingRights.ALL
        assert state.board == initial_state.board


class TestEnPassant:
    def _setup(self, initial_state: GameState) -> GameState:
        # 1. e4 a6 2. e5 d5
        return _play(
            initial_state,
            ((6, 4), (4, 4)),
            ((1, 0), (2, 0)),
            ((4, 4), (3, 4)),
            ((1, 3), (3, 3)),
        )

    def test_target_set_by_double_push(self, initial_state: GameState) -> None:
        state = self._setup(initial_state)
        assert state.en_passant == Square(2, 3)

    def test_capture(self, initial_state: GameState) -> None:
        state = _play(self._setup(initial_state), ((3, 4), (2, 3)))
        move = state.last_move
        assert move is not None
        assert move.is_en_passant
        assert move.notation == "exd6 e.p."
        assert move.captured == P("p")
        assert state.board[Square(3, 3)] is None
        assert state.board[Square(2, 3)] == P("P")
        assert state.captured_by(Color.WHITE) == (P("p"),)
        assert state.en_passant is None

    def test_window_is_one_ply(self, initial_state: GameState) -> None:
        state = _play(
            self._setup(initial_state),
            ((6, 7), (5, 7)),
            ((1, 7), (2, 7)),
        )
        assert state.en_passant is None
        assert apply_move(state, Square(3, 4), Square(2, 3)) is state

    def test_consecutive_double_pushes(self, initial_state: GameState) -> None:
        state = _play(initial_state, ((6, 4), (4, 4)), ((1, 3), (3, 3)))
        assert state.en_passant == Square(2, 3)
        state = _play(state, ((6, 0), (4, 0)))
        assert state.en_passant == Square(5, 0)

    def test_fen_with_misplaced_target_rejected(self) -> None:
        with pytest.raises(ValueError):
            state_from_fen("4k3/8/8/8/4p3/3P4/8/4K3 w - e4 0 1")

    def test_occupied_target_is_regular_capture(self) -> None:
        state = replace(
            state_from_fen("4k3/8/8/8/4p3/3P4/8/4K3 w - - 0 1"),
            en_passant=Square(4, 4),
        )
        state = _play(state, ((5, 3), (4, 4)))
        move = state.last_move
        assert move is not None
        assert not move.is_en_passant
        assert move.notation == "dxe4"
        assert move.captured == P("p")
        assert state.captured_by(Color.WHITE) == (P("p"),)
        assert state.board[Square(4, 4)] == P("P")


class TestCastling:
    def test_white_kingside(self) -> None:
        state = state_from_fen(KINGSIDE_FEN)
        state = _play(state, ((7, 4), (7, 6)))
        move = state.last_move
        assert move is not None
        assert move.is_castling
        assert move.notation == "O-O"
        assert state.board[Square(7, 5)] == P("R")
        assert state.board[Square(7, 6)] == P("K")
        assert state.board[Square(7, 4)] is None
        assert state.board[Square(7, 7)] is None
        assert state.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_clears_one_side(self) -> None:
        state = _play(state_from_fen(KINGSIDE_FEN), ((7, 7), (7, 6)))
        assert state.castling == CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE

    def test_rights_stay_cleared(self) -> None:
        state = _play(
            state_from_fen(KINGSIDE_FEN),
            ((7, 7), (7, 6)),
            ((1, 0), (2, 0)),
            ((7, 6), (7, 7)),
            ((2, 0), (3, 0)),
        )
        assert not state.castling & CastlingRights.WHITE_KINGSIDE
        assert apply_move(state, Square(7, 4), Square(7, 6)) is state


class TestPromotion:
    def test_enters_pending(self) -> None:
        state = state_from_fen(PROMOTION_FEN)
        pending = apply_move(state, Square(1, 4), Square(0, 4))
        assert pending.phase == GamePhase.PROMOTION_PENDING
        assert pending.pending_promotion is not None
        assert pending.pending_promotion.square == Square(0, 4)
        assert pending.pending_promotion.color == Color.WHITE
        assert pending.board == state.board
        assert pending.current_player == Color.WHITE
        assert pending.history == ()

    def test_choose(self) -> None:
        pending = apply_move(state_from_fen(PROMOTION_FEN), Square(1, 4), Square(0, 4))
        state = choose_promotion(pending, PieceType.QUEEN)
        move = state.last_move
        assert move is not None
        assert move.notation == "e8=Q"
        assert move.is_promotion
        assert move.promoted_to == PieceType.QUEEN
        assert state.board[Square(0, 4)] == P("Q")
        assert state.board[Square(1, 4)] is None
        assert state.pending_promotion is None
        assert state.current_player == Color.BLACK
        assert state.is_check

    def test_underpromotion(self) -> None:
        pending = apply_move(state_from_fen(PROMOTION_FEN), Square(1, 4), Square(0, 4))
        state = choose_promotion(pending, PieceType.KNIGHT)
        assert state.board[Square(0, 4)] == P("N")
        assert not state.is_check

    def test_cancel(self) -> None:
        state = state_from_fen(PROMOTION_FEN)
        pending = apply_move(state, Square(1, 4), Square(0, 4))
        cancelled = cancel_promotion(pending)
        assert cancelled.pending_promotion is None
        assert cancelled.selected_square is None
        assert cancelled.board == state.board
        assert cancelled.current_player == state.current_player
        assert cancelled.phase == GamePhase.IDLE

    @pytest.mark.parametrize("piece_type", [PieceType.PAWN, PieceType.KING])
    def test_invalid_piece_type(self, piece_type: PieceType) -> None:
        pending = apply_move(state_from_fen(PROMOTION_FEN), Square(1, 4), Square(0, 4))
        with pytest.raises(InvalidPromotionError):
            choose_promotion(pending, piece_type)
        assert pending.pending_promotion is not None
        # Still completable afterwards.
        assert choose_promotion(pending, PieceType.ROOK).board[Square(0, 4)] == P("R")

    def test_other_moves_blocked_while_pending(self) -> None:
        pending = apply_move(state_from_fen(PROMOTION_FEN), Square(1, 4), Square(0, 4))
        assert apply_move(pending, Square(7, 7), Square(6, 7)) is pending
        assert select_square(pending, Square(7, 7)) is pending

    def test_nothing_pending(self, initial_state: GameState) -> None:
        assert choose_promotion(initial_state, PieceType.QUEEN) is initial_state
        assert cancel_promotion(initial_state) is initial_state

    def test_via_selection(self) -> None:
        state = select_square(state_from_fen(PROMOTION_FEN), Square(1, 4))
        pending = select_square(state, Square(0, 4))
        assert pending.phase == GamePhase.PROMOTION_PENDING
        assert pending.selected_square == Square(1, 4)


class TestSelection:
    def test_select_own_piece(self, initial_state: GameState) -> None:
        state = select_square(initial_state, Square(6, 4))
        assert state.phase == GamePhase.SELECTED
        assert state.selected_square == Square(6, 4)
        assert state.legal_moves == {Square(5, 4), Square(4, 4)}

    def test_reselect_same_square_deselects(self, initial_state: GameState) -> None:
        state = select_square(initial_state, Square(6, 4))
        state = select_square(state, Square(6, 4))
        assert state.phase == GamePhase.IDLE
        assert state.legal_moves == frozenset()

    def test_switch_piece(self, initial_state: GameState) -> None:
        state = select_square(initial_state, Square(6, 4))
        state = select_square(state, Square(7, 6))
        assert state.selected_square == Square(7, 6)
        assert state.legal_moves == {Square(5, 5), Square(5, 7)}

    def test_empty_square_deselects(self, initial_state: GameState) -> None:
        state = select_square(initial_state, Square(6, 4))
        state = select_square(state, Square(3, 3))
        assert state.selected_square is None

    def test_opponent_piece_deselects(self, initial_state: GameState) -> None:
        state = select_square(initial_state, Square(6, 4))
        state = select_square(state, Square(1, 4))
        assert state.selected_square is None
        assert state.current_player == Color.WHITE

    def test_opponent_piece_not_selectable(self, initial_state: GameState) -> None:
        assert select_square(initial_state, Square(1, 4)) is initial_state

    def test_off_board(self, initial_state: GameState) -> None:
        assert select_square(initial_state, Square(8, 0)) is initial_state

    def test_select_then_move(self, initial_state: GameState) -> None:
        state = select_square(initial_state, Square(6, 4))
        state = select_square(state, Square(4, 4))
        assert state.current_player == Color.BLACK
        assert state.last_move is not None
        assert state.last_move.notation == "e4"
        assert state.phase == GamePhase.IDLE


class TestKingSafety:
    PINNED = "4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1"

    def test_pinned_piece_rejected(self) -> None:
        state = state_from_fen(self.PINNED)
        assert apply_move(state, Square(6, 4), Square(5, 3)) is state
        assert Square(5, 3) not in select_square(state, Square(6, 4)).legal_moves

    def test_pseudo_legal_option(self) -> None:
        state = state_from_fen(self.PINNED, GameOptions.pseudo_legal())
        after = apply_move(state, Square(6, 4), Square(5, 3))
        assert after is not state
        assert not after.is_check

    def test_fools_mate(self, initial_state: GameState) -> None:
        state = _play(
            initial_state,
            ((6, 5), (5, 5)),
            ((1, 4), (3, 4)),
            ((6, 6), (4, 6)),
            ((0, 3), (4, 7)),
        )
        assert state.last_move is not None
        assert state.last_move.notation == "Qh4"
        assert state.is_check
        assert state.is_checkmate
        assert state.game_over
        assert state.result == GameResult.BLACK_WINS
        assert state.phase == GamePhase.GAME_OVER
        assert apply_move(state, Square(6, 0), Square(5, 0)) is state
        assert select_square(state, Square(6, 0)) is state

    def test_fools_mate_without_king_safety(self) -> None:
        state = _play(
            create_initial_state(GameOptions.pseudo_legal()),
            ((6, 5), (5, 5)),
            ((1, 4), (3, 4)),
            ((6, 6), (4, 6)),
            ((0, 3), (4, 7)),
        )
        assert not state.is_check
        assert not state.is_checkmate
        assert not state.game_over

    def test_stalemate(self) -> None:
        state = state_from_fen("7k/8/5K2/6Q1/8/8/8/8 w - - 0 1")
        state = _play(state, ((3, 6), (2, 6)))
        assert state.is_stalemate
        assert not state.is_checkmate
        assert state.game_over
        assert state.result == GameResult.DRAW

    def test_checkmate_position_from_fen(self) -> None:
        state = state_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert state.is_checkmate
        assert state.result == GameResult.WHITE_WINS


class TestNewGameAndView:
    def test_new_game_resets(self, initial_state: GameState) -> None:
        state = flip_board_view(_play(initial_state, ((6, 4), (4, 4))))
        fresh = new_game(state)
        assert fresh.history == ()
        assert fresh.board == initial_state.board
        assert fresh.current_player == Color.WHITE
        assert fresh.board_flipped

    def test_new_game_keeps_options(self) -> None:
        state = create_initial_state(GameOptions.pseudo_legal())
        assert not new_game(state).options.enforce_king_safety

    def test_new_game_without_state(self) -> None:
        assert new_game() == create_initial_state()

    def test_flip_is_presentation_only(self, initial_state: GameState) -> None:
        flipped = flip_board_view(initial_state)
        assert flipped.board_flipped
        assert flipped.board == initial_state.board
        assert not flip_board_view(flipped).board_flipped
