"""Chess engine package: evaluation, minimax search and move strategies."""

from chessling.engine.evaluate import BoardEvaluator, Evaluate
from chessling.engine.minimax import MinimaxEngine
from chessling.engine.search import (
    DEFAULT_DEPTH,
    MATE_SCORE,
    IEngine,
    SearchLimits,
    SearchResult,
    SearchStats,
)
from chessling.engine.strategies import best_move, random_move, worst_move

DefaultEngine: type[IEngine] = MinimaxEngine

__all__ = [
    "BoardEvaluator",
    "DEFAULT_DEPTH",
    "DefaultEngine",
    "Evaluate",
    "IEngine",
    "MATE_SCORE",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "SearchStats",
    "best_move",
    "random_move",
    "worst_move",
]
