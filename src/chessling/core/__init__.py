"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chessling.core import Board, parse_san

    board = Board.initial()
    board.play_move(parse_san(board, "e4"))
    for move in board.generate_legal_moves():
        print(move)
"""

from chessling.core.board import Board
from chessling.core.enums import CastleSide, CastlingRights, Color, MoveFlag, PieceType
from chessling.core.errors import (
    AmbiguousMove,
    GameAlreadyOver,
    GameError,
    InvalidMove,
    InvalidPosition,
)
from chessling.core.move import Move
from chessling.core.notation import (
    STARTING_FEN,
    FenRecord,
    board_to_fen,
    move_to_san,
    parse_fen,
    parse_san,
)
from chessling.core.piece import PIECE_VALUES, Piece
from chessling.core.rules import GameResult, MoveOutcome, Rules
from chessling.core.types import Square, parse_square

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "AmbiguousMove",
    "GameAlreadyOver",
    "GameError",
    "InvalidMove",
    "InvalidPosition",
    # Types / helpers
    "Square",
    "parse_square",
    # Domain objects
    "Board",
    "Move",
    "MoveOutcome",
    "PIECE_VALUES",
    "Piece",
    "Rules",
    # Notation
    "STARTING_FEN",
    "FenRecord",
    "board_to_fen",
    "move_to_san",
    "parse_fen",
    "parse_san",
]
