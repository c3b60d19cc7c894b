"""Recoverable, caller-reported failures of the game and notation layers."""

from __future__ import annotations


class GameError(Exception):
    """Base class for every error a front end is expected to handle."""


class InvalidMove(GameError, ValueError):
    """Move text matched no legal move, or the action is not allowed now."""


class AmbiguousMove(GameError, ValueError):
    """Move text matched more than one legal move."""

    def __init__(self, text: str, candidates: list[object] | None = None) -> None:
        self.text = text
        self.candidates = list(candidates or [])
        detail = ", ".join(str(c) for c in self.candidates)
        super().__init__(
            f"Ambiguous move: {text}" + (f" (candidates: {detail})" if detail else "")
        )


class GameAlreadyOver(GameError):
    """An action was submitted after the game reached a terminal status."""


class InvalidPosition(GameError, ValueError):
    """A FEN string could not be turned into a playable position."""
