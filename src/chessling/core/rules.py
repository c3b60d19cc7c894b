"""High-level chess rules: game result of a position and of playing a move."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from chessling.core.enums import Color

if TYPE_CHECKING:
    from chessling.core.board import Board
    from chessling.core.move import Move


class GameResult(IntEnum):
    """Outcome of a position for the side to move."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    STALEMATE = 3

    @classmethod
    def victory(cls, winner: Color) -> GameResult:
        return cls.WHITE_WINS if winner == Color.WHITE else cls.BLACK_WINS

    @property
    def winner(self) -> Color | None:
        if self == GameResult.WHITE_WINS:
            return Color.WHITE
        if self == GameResult.BLACK_WINS:
            return Color.BLACK
        return None


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What happened when a move was offered to a board.

    ``board`` is the resulting position (the original when the move was
    illegal); ``illegal_move`` is set only when the move was rejected.
    """

    result: GameResult
    board: Board
    illegal_move: Move | None = None

    @property
    def is_continuing(self) -> bool:
        return self.illegal_move is None and self.result == GameResult.IN_PROGRESS


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return board.in_check(board.side_to_move)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        return board.is_checkmate(board.side_to_move)

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        return board.is_stalemate(board.side_to_move)

    @staticmethod
    def game_result(board: Board) -> GameResult:
        """Determine the current game result."""
        if board.generate_legal_moves():
            return GameResult.IN_PROGRESS
        if board.in_check(board.side_to_move):
            return GameResult.victory(board.side_to_move.opposite)
        return GameResult.STALEMATE

    @staticmethod
    def play(board: Board, move: Move) -> MoveOutcome:
        """Play *move* on a copy of *board* and classify the resulting position."""
        if not board.is_legal_move(move):
            return MoveOutcome(GameResult.IN_PROGRESS, board, illegal_move=move)
        next_board = board.after_move(move)
        return MoveOutcome(Rules.game_result(next_board), next_board)
