"""Game state machine: turns SAN actions into board updates and a terminal status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessling.core.board import Board
from chessling.core.enums import Color, PieceType
from chessling.core.errors import GameAlreadyOver, InvalidMove
from chessling.core.notation import move_to_san, parse_fen, parse_san
from chessling.core.rules import GameResult, Rules
from chessling.game.actions import (
    AcceptDraw,
    GameAction,
    GameOver,
    MakeMove,
    OfferDraw,
    Resign,
)

if TYPE_CHECKING:
    from chessling.core.move import Move
    from chessling.core.piece import Piece

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    color: Color
    move: Move
    san: str
    fen_after: str
    captured: Piece | None = None
    was_check: bool = False


class Game:
    """One game from a starting position until a :class:`GameOver` status.

    Actions are submitted through :meth:`make_move`. Every rejected action
    raises a :class:`~chessling.core.errors.GameError` subclass and leaves the
    game exactly as it was.

    Not thread-safe: callers serialise access themselves.
    """

    __slots__ = (
        "_board",
        "_status",
        "_draw_offered_by",
        "_halfmove_clock",
        "_fullmove_number",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self._board = board.copy() if board is not None else Board.initial()
        self._status: GameOver | None = None
        self._draw_offered_by: Color | None = None
        self._halfmove_clock = halfmove_clock
        self._fullmove_number = fullmove_number
        self._history: list[MoveRecord] = []
        # A position loaded from FEN may already be finished.
        self._update_status()

    @classmethod
    def from_fen(cls, fen: str) -> Game:
        """Start a game from *fen*; raises ``InvalidPosition`` when malformed."""
        record = parse_fen(fen)
        return cls(record.board, record.halfmove_clock, record.fullmove_number)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """Copy of the current board; mutating it does not affect the game."""
        return self._board.copy()

    @property
    def status(self) -> GameOver | None:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is not None

    @property
    def draw_offered_by(self) -> Color | None:
        return self._draw_offered_by

    @property
    def halfmove_clock(self) -> int:
        return self._halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self._fullmove_number

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    def get_turn_color(self) -> Color:
        return self._board.side_to_move

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move; empty once the game is over."""
        if self._status is not None:
            return []
        return self._board.generate_legal_moves()

    def captured_pieces(self, color: Color) -> list[Piece]:
        """Pieces captured by *color*, in the order they were taken."""
        return [
            record.captured
            for record in self._history
            if record.color == color and record.captured is not None
        ]

    def to_fen(
        self,
        halfmove_clock: int | None = None,
        fullmove_number: int | None = None,
    ) -> str:
        """Current position as FEN; counters default to the game's own."""
        if halfmove_clock is None:
            halfmove_clock = self._halfmove_clock
        if fullmove_number is None:
            fullmove_number = self._fullmove_number
        return self._board.to_fen(halfmove_clock, fullmove_number)

    # ── Actions ──────────────────────────────────────────────────────────

    def make_move(self, action: GameAction) -> GameOver | None:
        """Apply *action* and return the game status afterwards.

        Raises:
            GameAlreadyOver: the game has already ended.
            InvalidMove: the SAN matches no legal move, or no draw is on offer.
            AmbiguousMove: the SAN matches more than one legal move.
        """
        if self._status is not None:
            _LOGGER.debug("Rejected %r: game already over (%s)", action, self._status.name)
            raise GameAlreadyOver(f"Game is over: {self._status.name}")

        if isinstance(action, (MakeMove, OfferDraw)):
            self._play_san(action.san, offer_draw=isinstance(action, OfferDraw))
        elif isinstance(action, AcceptDraw):
            self._accept_draw()
        elif isinstance(action, Resign):
            self._status = GameOver.resignation_by(self._board.side_to_move)
            _LOGGER.info("%s resigns", self._board.side_to_move)
        else:
            raise TypeError(f"Unknown game action: {action!r}")

        return self._status

    # ── Internal ─────────────────────────────────────────────────────────

    def _play_san(self, san: str, offer_draw: bool) -> None:
        board = self._board
        try:
            move = parse_san(board, san)
        except InvalidMove:
            _LOGGER.debug("Rejected move %r in %s", san, board.to_fen())
            raise

        color = board.side_to_move
        mover = board[move.from_sq]
        notation = move_to_san(board, move)
        captured = board.play_move(move)

        if captured is not None or (mover is not None and mover.piece_type == PieceType.PAWN):
            self._halfmove_clock = 0
        else:
            self._halfmove_clock += 1
        if color == Color.BLACK:
            self._fullmove_number += 1

        self._draw_offered_by = color if offer_draw else None
        self._history.append(
            MoveRecord(
                color=color,
                move=move,
                san=notation,
                fen_after=self.to_fen(),
                captured=captured,
                was_check=board.in_check(board.side_to_move),
            )
        )
        _LOGGER.debug("%s plays %s", color, notation)
        if offer_draw:
            _LOGGER.info("%s offers a draw", color)
        self._update_status()

    def _accept_draw(self) -> None:
        side = self._board.side_to_move
        if self._draw_offered_by is None or self._draw_offered_by != side.opposite:
            _LOGGER.debug("Rejected draw acceptance by %s: no offer pending", side)
            raise InvalidMove("No draw offer to accept")
        self._status = GameOver.DRAW_ACCEPTED
        _LOGGER.info("%s accepts the draw", side)

    def _update_status(self) -> None:
        result = Rules.game_result(self._board)
        if result == GameResult.STALEMATE:
            self._status = GameOver.STALEMATE
        elif result.winner is not None:
            self._status = GameOver.checkmate_by(result.winner)
        else:
            return
        _LOGGER.info("Game over: %s", self._status.name)
