"""FEN parsing and serialization."""

from __future__ import annotations

from dataclasses import dataclass

from chessling.core.board import Board
from chessling.core.enums import CastlingRights, Color, PieceType
from chessling.core.errors import InvalidPosition
from chessling.core.piece import Piece
from chessling.core.types import Square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


@dataclass(frozen=True, slots=True)
class FenRecord:
    """A parsed FEN: the board plus the two counters the board does not own."""

    board: Board
    halfmove_clock: int
    fullmove_number: int


def parse_fen(fen: str) -> FenRecord:
    """Parse a six-field FEN string.

    Raises:
        InvalidPosition: malformed fields, unknown piece letters, bad squares,
            or a missing/duplicated king.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise InvalidPosition(f"Invalid FEN (need 6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    # 1. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise InvalidPosition(f"Invalid FEN side-to-move field: {side_part!r}")

    board = Board(side_to_move=side)

    # 2. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidPosition(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    king_counts = {Color.WHITE: 0, Color.BLACK: 0}
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "0123456789":
                step = int(ch)
                if not (1 <= step <= 8):
                    raise InvalidPosition(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise InvalidPosition(f"Invalid FEN rank width: {fen!r}")
                try:
                    piece = Piece.from_char(ch)
                except ValueError as exc:
                    raise InvalidPosition(f"Invalid FEN piece {ch!r}: {fen!r}") from exc
                if piece.piece_type == PieceType.KING:
                    king_counts[piece.color] += 1
                board[Square(file, rank)] = piece
                file += 1
            if file > 8:
                raise InvalidPosition(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise InvalidPosition(f"Invalid FEN rank width: {fen!r}")

    for color, count in king_counts.items():
        if count != 1:
            raise InvalidPosition(
                f"Invalid FEN: expected one {color.name} king, found {count}"
            )

    # The side that just moved cannot have left its own king attacked.
    if board.in_check(side.opposite):
        raise InvalidPosition(
            f"Invalid FEN: {side.opposite.name} king is in check with {side.name} to move"
        )

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise InvalidPosition(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right
    board.castling = castling

    # 4. En passant
    if ep_part != "-":
        try:
            ep = Square.parse(ep_part)
        except ValueError as exc:
            raise InvalidPosition(f"Invalid FEN en-passant square: {ep_part!r}") from exc
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if ep.rank != expected_ep_rank:
            raise InvalidPosition(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        # The pawn that just advanced two squares stands one rank past the target.
        pushed = ep.offset(0, side.opposite.forward)
        if pushed is None or board[pushed] != Piece(side.opposite, PieceType.PAWN):
            raise InvalidPosition(
                f"Invalid FEN en-passant square without a pushed pawn: {ep_part!r}"
            )
        board.en_passant = ep

    # 5–6. Clocks
    halfmove = _parse_counter(half_part, "halfmove clock", minimum=0)
    fullmove = _parse_counter(full_part, "fullmove number", minimum=1)

    return FenRecord(board, halfmove, fullmove)


def _parse_counter(text: str, label: str, minimum: int) -> int:
    if not (text.isascii() and text.isdigit()):
        raise InvalidPosition(f"Invalid FEN {label}: {text!r}")
    value = int(text)
    if value < minimum:
        raise InvalidPosition(f"Invalid FEN {label}: {text!r}")
    return value


def board_to_fen(board: Board, halfmove_clock: int = 0, fullmove_number: int = 1) -> str:
    """Serialise *board* to FEN with the caller-tracked counters."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[Square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if board.castling & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = str(board.en_passant) if board.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {halfmove_clock} {fullmove_number}"
