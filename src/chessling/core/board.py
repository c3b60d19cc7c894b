"""Board: piece placement plus the side to move, castling rights and en-passant target.

Legality is decided here: a move is legal when it is pseudo-legal for the piece
on its source square and playing it on a scratch copy leaves the mover's king
unattacked.
"""

from __future__ import annotations

from chessling.core import movement
from chessling.core.enums import CastleSide, CastlingRights, Color, PieceType
from chessling.core.errors import InvalidMove
from chessling.core.move import CASTLE_ROOK_FILES, PROMOTION_TYPES, Move
from chessling.core.piece import Piece
from chessling.core.types import ALL_SQUARES, Square

_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    Square(7, 0): CastlingRights.WHITE_KINGSIDE,
    Square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    Square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

# Files that must be empty / must not be attacked for each castle side.
_CASTLE_EMPTY_FILES: dict[CastleSide, tuple[int, ...]] = {
    CastleSide.KINGSIDE: (5, 6),
    CastleSide.QUEENSIDE: (1, 2, 3),
}
_CASTLE_SAFE_FILES: dict[CastleSide, tuple[int, ...]] = {
    CastleSide.KINGSIDE: (5, 6),
    CastleSide.QUEENSIDE: (2, 3),
}


class Board:
    """Mutable 64-square board plus the state needed to decide legality.

    Half-move clock and full-move number are not part of the board; they are
    tracked by the caller and passed to :meth:`to_fen`.
    """

    __slots__ = ("_squares", "_king_squares", "side_to_move", "castling", "en_passant")

    def __init__(
        self,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None] * _COLOR_COUNT
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq.index]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        idx = sq.index
        old_piece = self._squares[idx]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == sq
        ):
            self._king_squares[int(old_piece.color)] = None

        self._squares[idx] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def get_piece(self, sq: Square) -> Piece | None:
        return self._squares[sq.index]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq.index] is None

    def has_ally_piece(self, sq: Square, color: Color) -> bool:
        piece = self._squares[sq.index]
        return piece is not None and piece.color == color

    def has_enemy_piece(self, sq: Square, color: Color) -> bool:
        piece = self._squares[sq.index]
        return piece is not None and piece.color != color

    def get_turn_color(self) -> Color:
        return self.side_to_move

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Square]:
        """Squares occupied by *color* (optionally only *piece_type*), a1 first."""
        return [
            sq
            for sq, piece in zip(ALL_SQUARES, self._squares)
            if piece is not None
            and piece.color == color
            and (piece_type is None or piece.piece_type == piece_type)
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise RuntimeError(f"No {color.name} king on board")
        return sq

    def material(self, color: Color) -> int:
        """Sum of material values of *color*'s pieces, in centipawns."""
        return sum(
            piece.value
            for piece in self._squares
            if piece is not None and piece.color == color
        )

    # -- Attack / check detection ---------------------------------------------

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return movement.is_square_attacked(self, sq, by_color)

    def attacked_squares(self, by_color: Color) -> set[Square]:
        """Every square some piece of *by_color* attacks."""
        attacked: set[Square] = set()
        for sq in self.pieces(by_color):
            piece = self[sq]
            assert piece is not None
            attacked.update(movement.attacks(piece, sq, self))
        return attacked

    def in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return self.is_square_attacked(self.king_square(color), color.opposite)

    def is_checkmate(self, color: Color) -> bool:
        return self.in_check(color) and not self.generate_legal_moves(color)

    def is_stalemate(self, color: Color) -> bool:
        return not self.in_check(color) and not self.generate_legal_moves(color)

    # -- Move generation ------------------------------------------------------

    def generate_pseudo_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All pseudo-legal moves for *color* (may leave own king in check).

        Ordered by source square, then destination square; a pawn reaching the
        last rank yields Q, R, B, N promotions and castles follow the king's
        other moves, kingside first.
        """
        color = self.side_to_move if color is None else color
        moves: list[Move] = []
        for sq in self.pieces(color):
            moves.extend(self._moves_from(sq))
        return moves

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All strictly legal moves for *color* (default: side to move)."""
        color = self.side_to_move if color is None else color
        return [
            move
            for move in self.generate_pseudo_legal_moves(color)
            if self._is_king_safe_after(move, color)
        ]

    def is_legal_move(self, move: Move) -> bool:
        """Whether *move* may be played by the side to move right now."""
        piece = self[move.from_sq]
        if piece is None or piece.color != self.side_to_move:
            return False
        if move not in self._moves_from(move.from_sq):
            return False
        return self._is_king_safe_after(move, piece.color)

    # -- Move application -----------------------------------------------------

    def play_move(self, move: Move) -> Piece | None:
        """Apply a legal *move* in place and return the captured piece, if any.

        Raises:
            InvalidMove: *move* is not legal in this position.
        """
        if not self.is_legal_move(move):
            raise InvalidMove(f"Illegal move: {move}")
        return self._make_move(move)

    def after_move(self, move: Move) -> Board:
        """Copy of this board with *move* applied; the original is untouched.

        *move* is trusted to come from :meth:`generate_legal_moves`.
        """
        board = self.copy()
        board._make_move(move)
        return board

    def _make_move(self, move: Move) -> Piece | None:
        piece = self[move.from_sq]
        if piece is None:
            raise RuntimeError(f"No piece on {move.from_sq}")

        capture_sq = move.to_sq
        # En passant: the captured pawn sits beside the mover, not on the target
        if move.is_en_passant:
            capture_sq = Square(move.to_sq.file, move.from_sq.rank)
        captured = self[capture_sq]
        if captured is not None:
            self[capture_sq] = None

        self[move.from_sq] = None
        placed_piece = piece
        if move.is_promotion and move.promotion is not None:
            placed_piece = Piece(piece.color, move.promotion)
        self[move.to_sq] = placed_piece

        # Slide the rook for castling
        if move.is_castle and move.castle_side is not None:
            rank = move.from_sq.rank
            rook_from_file, rook_to_file = CASTLE_ROOK_FILES[move.castle_side]
            rook_from = Square(rook_from_file, rank)
            self[Square(rook_to_file, rank)] = self[rook_from]
            self[rook_from] = None

        # En passant target for the opponent
        self.en_passant = None
        if (
            piece.piece_type == PieceType.PAWN
            and abs(move.to_sq.rank - move.from_sq.rank) == 2
        ):
            self.en_passant = Square(
                move.from_sq.file, (move.from_sq.rank + move.to_sq.rank) // 2
            )

        self._update_castling(move, piece)
        self.side_to_move = self.side_to_move.opposite
        return captured

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.piece_type == PieceType.KING:
            self.castling &= ~CastlingRights.for_color(piece.color)
        for sq in (move.from_sq, move.to_sq):
            if sq in _ROOK_CORNERS:
                self.castling &= ~_ROOK_CORNERS[sq]

    # -- Generation internals -------------------------------------------------

    def _moves_from(self, sq: Square) -> list[Move]:
        piece = self[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        for to_sq in sorted(movement.destinations(piece, sq, self)):
            target = self[to_sq]
            if piece.piece_type == PieceType.PAWN:
                if to_sq.rank == movement.promotion_rank(piece.color):
                    moves.extend(Move.promote(sq, to_sq, pt) for pt in PROMOTION_TYPES)
                elif target is None and to_sq.file != sq.file:
                    moves.append(Move.en_passant(sq, to_sq))
                elif target is not None:
                    moves.append(Move.capture(sq, to_sq))
                else:
                    moves.append(Move.normal(sq, to_sq))
            elif target is not None:
                moves.append(Move.capture(sq, to_sq))
            else:
                moves.append(Move.normal(sq, to_sq))

        if piece.piece_type == PieceType.KING:
            moves.extend(self._castling_moves(piece.color, sq))
        return moves

    def _castling_moves(self, color: Color, king_sq: Square) -> list[Move]:
        rank = color.back_rank
        if king_sq != Square(4, rank):
            return []

        opponent = color.opposite
        moves: list[Move] = []
        for side in (CastleSide.KINGSIDE, CastleSide.QUEENSIDE):
            if not self.castling & CastlingRights.for_side(color, side):
                continue
            rook_file, _ = CASTLE_ROOK_FILES[side]
            if self[Square(rook_file, rank)] != Piece(color, PieceType.ROOK):
                continue
            if any(not self.is_empty(Square(f, rank)) for f in _CASTLE_EMPTY_FILES[side]):
                continue
            # Checked last: attack detection is the expensive part.
            if self.is_square_attacked(king_sq, opponent):
                return []
            if any(
                self.is_square_attacked(Square(f, rank), opponent)
                for f in _CASTLE_SAFE_FILES[side]
            ):
                continue
            moves.append(Move.castle(color, side))
        return moves

    def _is_king_safe_after(self, move: Move, color: Color) -> bool:
        scratch = self.after_move(move)
        return not scratch.is_square_attacked(scratch.king_square(color), color.opposite)

    # -- Copying / factories --------------------------------------------------

    def copy(self) -> Board:
        b = Board(self.side_to_move, self.castling, self.en_passant)
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls(Color.WHITE, CastlingRights.ALL, None)
        for f in range(8):
            b[Square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)

        for f, pt in enumerate(_BACK_RANK):
            b[Square(f, 0)] = Piece(Color.WHITE, pt)
            b[Square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    @classmethod
    def from_fen(cls, fen: str) -> Board:
        """Board described by *fen* (clock fields are validated, then dropped)."""
        from chessling.core.notation.fen import parse_fen

        return parse_fen(fen).board

    def to_fen(self, halfmove_clock: int = 0, fullmove_number: int = 1) -> str:
        from chessling.core.notation.fen import board_to_fen

        return board_to_fen(self, halfmove_clock, fullmove_number)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[Square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
