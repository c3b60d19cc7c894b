"""Move-choosing strategies for computer players.

Each strategy takes a :class:`Board` and returns one of its legal moves, or
``None`` when the side to move has none.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from chessling.engine.evaluate import BoardEvaluator
from chessling.engine.search import DEFAULT_DEPTH

if TYPE_CHECKING:
    from chessling.core.board import Board
    from chessling.core.move import Move


def best_move(board: Board, depth: int = DEFAULT_DEPTH) -> Move | None:
    """Strongest move found by alpha-beta minimax to *depth* plies."""
    return BoardEvaluator(board).get_best_next_move(depth)


def worst_move(board: Board, depth: int = DEFAULT_DEPTH) -> Move | None:
    """Move that leaves the side to move worst off; for handicapped play."""
    return BoardEvaluator(board).get_worst_next_move(depth)


def random_move(board: Board, rng: random.Random | None = None) -> Move | None:
    """Uniformly random legal move. Pass a seeded *rng* for reproducible games."""
    moves = board.generate_legal_moves()
    if not moves:
        return None
    return (rng or random).choice(moves)
