"""Evaluation contract and minimax with alpha-beta pruning.

:class:`Evaluate` plays the role of a capability interface: anything that can
score itself, list its legal moves and produce a successor state gets minimax
search for free. :class:`BoardEvaluator` is the Board-backed implementation.

Search branches never share state: :meth:`Evaluate.apply_eval_move` returns a
new object, so sibling subtrees cannot observe each other's moves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from chessling.core.enums import Color
from chessling.core.types import ALL_SQUARES
from chessling.engine.search import INF_SCORE, MATE_SCORE, SearchStats

if TYPE_CHECKING:
    from chessling.core.board import Board
    from chessling.core.move import Move


class Evaluate(ABC):
    """A searchable game state."""

    @property
    @abstractmethod
    def turn(self) -> Color:
        """Side to move in this state."""

    @abstractmethod
    def value_for(self, color: Color) -> int:
        """Static score of this state; positive favours *color*."""

    @abstractmethod
    def get_legal_moves(self, color: Color | None = None) -> list[Move]:
        """Legal moves for *color* (default: side to move), in generation order."""

    @abstractmethod
    def apply_eval_move(self, move: Move) -> Evaluate:
        """Successor state after *move*; ``self`` is left untouched."""

    @abstractmethod
    def is_in_check(self) -> bool:
        """Whether the side to move is in check."""

    # ── Search ───────────────────────────────────────────────────────────

    def minimax(
        self,
        depth: int,
        color_to_maximize: Color,
        alpha: int = -INF_SCORE,
        beta: int = INF_SCORE,
        stats: SearchStats | None = None,
    ) -> tuple[int, Move | None]:
        """Minimax with alpha-beta pruning.

        Returns the score from *color_to_maximize*'s point of view and the first
        move (in generation order) that achieves it; the move is ``None`` at
        leaves and terminal states.
        """
        if stats is not None:
            stats.nodes += 1
        if depth <= 0:
            return self.value_for(color_to_maximize), None

        moves = self.get_legal_moves()
        if not moves:
            return self._terminal_score(depth, color_to_maximize), None

        maximizing = self.turn == color_to_maximize
        best_score = -INF_SCORE if maximizing else INF_SCORE
        best_move: Move | None = None

        for move in moves:
            score, _ = self.apply_eval_move(move).minimax(
                depth - 1, color_to_maximize, alpha, beta, stats
            )
            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)
            if alpha >= beta:
                if stats is not None:
                    stats.cutoffs += 1
                break

        return best_score, best_move

    def full_width_minimax(
        self, depth: int, color_to_maximize: Color
    ) -> tuple[int, Move | None]:
        """Plain minimax without pruning; visits every node up to *depth*."""
        if depth <= 0:
            return self.value_for(color_to_maximize), None

        moves = self.get_legal_moves()
        if not moves:
            return self._terminal_score(depth, color_to_maximize), None

        maximizing = self.turn == color_to_maximize
        best_score = -INF_SCORE if maximizing else INF_SCORE
        best_move: Move | None = None
        for move in moves:
            score, _ = self.apply_eval_move(move).full_width_minimax(
                depth - 1, color_to_maximize
            )
            if (maximizing and score > best_score) or (
                not maximizing and score < best_score
            ):
                best_score = score
                best_move = move
        return best_score, best_move

    def get_best_next_move(
        self, depth: int, stats: SearchStats | None = None
    ) -> Move | None:
        """Best move for the side to move; ``None`` when it has no legal move."""
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")
        _, move = self.minimax(depth, self.turn, stats=stats)
        return move

    def get_worst_next_move(
        self, depth: int, stats: SearchStats | None = None
    ) -> Move | None:
        """Move that leaves the side to move worst off against best replies."""
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")
        color = self.turn
        worst_score = INF_SCORE
        worst_move: Move | None = None
        for move in self.get_legal_moves():
            score, _ = self.apply_eval_move(move).minimax(depth - 1, color, stats=stats)
            if score < worst_score:
                worst_score = score
                worst_move = move
        return worst_move

    def _terminal_score(self, depth: int, color_to_maximize: Color) -> int:
        if not self.is_in_check():
            return 0  # stalemate
        # More remaining depth means the mate happened sooner.
        mate = MATE_SCORE + depth
        return -mate if self.turn == color_to_maximize else mate


class BoardEvaluator(Evaluate):
    """Board-backed :class:`Evaluate`: material plus positional tables."""

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def board(self) -> Board:
        return self._board

    @property
    def turn(self) -> Color:
        return self._board.side_to_move

    def value_for(self, color: Color) -> int:
        score = 0
        for sq in ALL_SQUARES:
            piece = self._board[sq]
            if piece is None:
                continue
            val = piece.value + piece.positional_bonus(sq)
            score += val if piece.color == color else -val
        return score

    def get_legal_moves(self, color: Color | None = None) -> list[Move]:
        return self._board.generate_legal_moves(color)

    def apply_eval_move(self, move: Move) -> BoardEvaluator:
        return BoardEvaluator(self._board.after_move(move))

    def is_in_check(self) -> bool:
        return self._board.in_check(self._board.side_to_move)
