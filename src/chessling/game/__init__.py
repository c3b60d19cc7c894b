"""Game layer: player actions and the game state machine.

Quick start::

    from chessling.game import Game, MakeMove, Resign

    game = Game()
    game.make_move(MakeMove("e4"))
    game.make_move(MakeMove("e5"))
    status = game.make_move(Resign())  # GameOver.WHITE_RESIGNS
"""

from chessling.game.actions import (
    AcceptDraw,
    GameAction,
    GameOver,
    MakeMove,
    OfferDraw,
    Resign,
)
from chessling.game.state import Game, MoveRecord

__all__ = [
    "AcceptDraw",
    "Game",
    "GameAction",
    "GameOver",
    "MakeMove",
    "MoveRecord",
    "OfferDraw",
    "Resign",
]
