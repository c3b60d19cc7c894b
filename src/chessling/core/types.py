"""Square value type and coordinate helpers.

Board layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """A board square: file 0–7 (a–h) and rank 0–7 (1–8).

    Ordering follows :attr:`index`, so sorting squares walks a1, b1, ..., h8.
    """

    rank: int
    file: int

    def __init__(self, file: int, rank: int) -> None:
        if not (0 <= file < 8 and 0 <= rank < 8):
            raise ValueError(f"Square out of range: file={file}, rank={rank}")
        object.__setattr__(self, "file", file)
        object.__setattr__(self, "rank", rank)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_index(cls, index: int) -> Square:
        """Square for a 0–63 index, e.g. 28 → e4."""
        if not (0 <= index < 64):
            raise ValueError(f"Square index out of range: {index}")
        return _SQUARES[index]

    @classmethod
    def parse(cls, name: str) -> Square:
        """Parse square name, e.g. 'e4' → Square(4, 3)."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return _SQUARES[_RANKS.index(name[1]) * 8 + _FILES.index(name[0])]

    # ── Arithmetic ───────────────────────────────────────────────────────

    def offset(self, file_delta: int, rank_delta: int) -> Square | None:
        """Square shifted by the given deltas, or ``None`` if it leaves the board."""
        file = self.file + file_delta
        rank = self.rank + rank_delta
        if 0 <= file < 8 and 0 <= rank < 8:
            return _SQUARES[rank * 8 + file]
        return None

    @property
    def index(self) -> int:
        return self.rank * 8 + self.file

    @property
    def is_light(self) -> bool:
        return (self.file + self.rank) % 2 == 1

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        """Human-readable name, e.g. 'h8'."""
        return _FILES[self.file] + _RANKS[self.rank]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Square({self.name})"


_SQUARES: tuple[Square, ...] = tuple(Square(i & 7, i >> 3) for i in range(64))
ALL_SQUARES = _SQUARES


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4'."""
    return Square.parse(name)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = _SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = _SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = _SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = _SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = _SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = _SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = _SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = _SQUARES[56:64]
