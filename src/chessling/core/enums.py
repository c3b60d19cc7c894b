"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction this side's pawns advance in."""
        return 1 if self == Color.WHITE else -1

    @property
    def back_rank(self) -> int:
        return 0 if self == Color.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Move variant tag."""

    NORMAL = 0
    CAPTURE = 1
    EN_PASSANT = 2
    CASTLE = 3
    PROMOTION = 4


class CastleSide(IntEnum):
    """Which rook the king castles with."""

    KINGSIDE = 0
    QUEENSIDE = 1


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, color: Color, side: CastleSide) -> CastlingRights:
        """The single right for *color* castling on *side*."""
        if color == Color.WHITE:
            return (
                cls.WHITE_KINGSIDE if side == CastleSide.KINGSIDE else cls.WHITE_QUEENSIDE
            )
        return cls.BLACK_KINGSIDE if side == CastleSide.KINGSIDE else cls.BLACK_QUEENSIDE

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH
