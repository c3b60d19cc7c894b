"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessling.core.board import Board
    from chessling.core.move import Move

DEFAULT_DEPTH = 4
MATE_SCORE = 100_000
INF_SCORE = 1_000_000


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = DEFAULT_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int


@dataclass(slots=True)
class SearchStats:
    """Counters filled in while a search runs."""

    nodes: int = 0
    cutoffs: int = 0


class IEngine(Protocol):
    """Protocol for move-choosing engines used by the game layer."""

    def search(self, board: Board, limits: SearchLimits) -> SearchResult: ...
