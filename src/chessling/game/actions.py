"""Actions a player can submit to a :class:`~chessling.game.state.Game`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Union

from chessling.core.enums import Color


@dataclass(frozen=True, slots=True)
class MakeMove:
    """Play the move named by *san*."""

    san: str


@dataclass(frozen=True, slots=True)
class OfferDraw:
    """Play the move named by *san* and offer a draw with it."""

    san: str


@dataclass(frozen=True, slots=True)
class AcceptDraw:
    """Accept the opponent's pending draw offer."""


@dataclass(frozen=True, slots=True)
class Resign:
    """The side to move resigns."""


GameAction = Union[MakeMove, OfferDraw, AcceptDraw, Resign]


class GameOver(IntEnum):
    """Terminal status of a game."""

    WHITE_CHECKMATES = auto()
    BLACK_CHECKMATES = auto()
    WHITE_RESIGNS = auto()
    BLACK_RESIGNS = auto()
    STALEMATE = auto()
    DRAW_ACCEPTED = auto()

    @classmethod
    def checkmate_by(cls, color: Color) -> GameOver:
        return cls.WHITE_CHECKMATES if color == Color.WHITE else cls.BLACK_CHECKMATES

    @classmethod
    def resignation_by(cls, color: Color) -> GameOver:
        return cls.WHITE_RESIGNS if color == Color.WHITE else cls.BLACK_RESIGNS

    @property
    def winner(self) -> Color | None:
        """Winning side, or ``None`` for a draw."""
        if self in (GameOver.WHITE_CHECKMATES, GameOver.BLACK_RESIGNS):
            return Color.WHITE
        if self in (GameOver.BLACK_CHECKMATES, GameOver.WHITE_RESIGNS):
            return Color.BLACK
        return None

    @property
    def is_draw(self) -> bool:
        return self in (GameOver.STALEMATE, GameOver.DRAW_ACCEPTED)
