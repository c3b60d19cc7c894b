"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessling.core.board import Board


@pytest.fixture
def start_board() -> Board:
    """Fresh board in the standard starting position."""
    return Board.initial()


@pytest.fixture
def castling_board() -> Board:
    """Kings and rooks on their home squares with all castling rights."""
    return Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
