"""Move value object (tagged by :class:`MoveFlag`)."""

from __future__ import annotations

from dataclasses import dataclass

from chessling.core.enums import CastleSide, Color, MoveFlag, PieceType
from chessling.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# King destination file per castle side; the rook lands on the adjacent inner file.
_CASTLE_KING_FILE: dict[CastleSide, int] = {
    CastleSide.KINGSIDE: 6,
    CastleSide.QUEENSIDE: 2,
}
CASTLE_ROOK_FILES: dict[CastleSide, tuple[int, int]] = {
    CastleSide.KINGSIDE: (7, 5),
    CastleSide.QUEENSIDE: (0, 3),
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Variants: NORMAL and CAPTURE (``from``/``to``), EN_PASSANT, CASTLE (carries
    :attr:`castle_side`; ``from``/``to`` are the king's squares) and PROMOTION
    (carries :attr:`promotion`, with or without a capture).
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    castle_side: CastleSide | None = None

    # ── Variant constructors ─────────────────────────────────────────────

    @classmethod
    def normal(cls, from_sq: Square, to_sq: Square) -> Move:
        return cls(from_sq, to_sq)

    @classmethod
    def capture(cls, from_sq: Square, to_sq: Square) -> Move:
        return cls(from_sq, to_sq, MoveFlag.CAPTURE)

    @classmethod
    def en_passant(cls, from_sq: Square, to_sq: Square) -> Move:
        return cls(from_sq, to_sq, MoveFlag.EN_PASSANT)

    @classmethod
    def promote(cls, from_sq: Square, to_sq: Square, new_kind: PieceType) -> Move:
        if new_kind not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {new_kind.name}")
        return cls(from_sq, to_sq, MoveFlag.PROMOTION, promotion=new_kind)

    @classmethod
    def castle(cls, color: Color, side: CastleSide) -> Move:
        rank = color.back_rank
        return cls(
            Square(4, rank),
            Square(_CASTLE_KING_FILE[side], rank),
            MoveFlag.CASTLE,
            castle_side=side,
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_castle(self) -> bool:
        return self.flag == MoveFlag.CASTLE

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq}{self.to_sq}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
