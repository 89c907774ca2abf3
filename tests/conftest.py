"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from gambit.core.aux_state import AuxState
from gambit.core.board import Board
from gambit.game.state import GameState


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()


@pytest.fixture
def full_rights() -> AuxState:
    """Every castling right held, no en-passant target."""
    return AuxState()


@pytest.fixture
def initial_state() -> GameState:
    return GameState.initial()
