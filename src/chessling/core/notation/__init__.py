"""Notation package: FEN / SAN parsing and serialization."""

from chessling.core.notation.fen import (
    STARTING_FEN,
    FenRecord,
    board_to_fen,
    parse_fen,
)
from chessling.core.notation.san import is_capture, move_to_san, parse_san

__all__ = [
    "STARTING_FEN",
    "FenRecord",
    "board_to_fen",
    "parse_fen",
    "is_capture",
    "move_to_san",
    "parse_san",
]
