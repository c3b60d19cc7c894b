"""Fixed-depth minimax engine over :class:`BoardEvaluator`."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING

from chessling.engine.evaluate import BoardEvaluator
from chessling.engine.search import (
    MATE_SCORE,
    IEngine,
    SearchLimits,
    SearchResult,
    SearchStats,
)

if TYPE_CHECKING:
    from chessling.core.board import Board

_LOGGER = logging.getLogger(__name__)


class MinimaxEngine(IEngine):
    """Alpha-beta minimax to a fixed depth; the board passed in is never mutated."""

    __slots__ = ("_last_stats",)

    def __init__(self) -> None:
        self._last_stats = SearchStats()

    @property
    def last_stats(self) -> SearchStats:
        """Counters from the most recent :meth:`search` call."""
        return self._last_stats

    def search(self, board: Board, limits: SearchLimits) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        stats = SearchStats()
        self._last_stats = stats
        root = BoardEvaluator(board)

        if not root.get_legal_moves():
            score = -MATE_SCORE if root.is_in_check() else 0
            return SearchResult(None, score, 0, stats.nodes)

        started = perf_counter()
        score, move = root.minimax(limits.max_depth, root.turn, stats=stats)
        elapsed_ms = (perf_counter() - started) * 1000.0

        _LOGGER.debug(
            "depth=%d best=%s score=%d nodes=%d cutoffs=%d time=%.1fms",
            limits.max_depth,
            move,
            score,
            stats.nodes,
            stats.cutoffs,
            elapsed_ms,
        )
        return SearchResult(move, score, limits.max_depth, stats.nodes)
