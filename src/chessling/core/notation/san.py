"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re

from chessling.core.board import Board
from chessling.core.enums import CastleSide, PieceType
from chessling.core.errors import AmbiguousMove, InvalidMove
from chessling.core.move import Move
from chessling.core.types import Square

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_CASTLE_TOKENS: dict[str, CastleSide] = {
    "O-O": CastleSide.KINGSIDE,
    "0-0": CastleSide.KINGSIDE,
    "O-O-O": CastleSide.QUEENSIDE,
    "0-0-0": CastleSide.QUEENSIDE,
}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<to>[a-h][1-8])"
    r"(?:=?(?P<promotion>[NBRQ]))?$"
)


def is_capture(board: Board, move: Move) -> bool:
    """Whether *move* removes an enemy piece from *board*."""
    return move.is_en_passant or board[move.to_sq] is not None


def move_to_san(board: Board, move: Move) -> str:
    """Convert a legal *move* to SAN given the *board* before the move."""
    piece = board[move.from_sq]
    assert piece is not None

    # Castling
    if move.is_castle:
        san = "O-O" if move.castle_side == CastleSide.KINGSIDE else "O-O-O"
    else:
        san = ""
        captures = is_capture(board, move)

        if piece.piece_type == PieceType.PAWN:
            if captures:
                san += "abcdefgh"[move.from_sq.file]
        else:
            san += _SAN_PIECE[piece.piece_type]

            # Disambiguation
            ambiguous = [
                m
                for m in board.generate_legal_moves()
                if m.to_sq == move.to_sq
                and m.from_sq != move.from_sq
                and not m.is_castle
                and board[m.from_sq] == piece
            ]
            if ambiguous:
                same_file = any(m.from_sq.file == move.from_sq.file for m in ambiguous)
                same_rank = any(m.from_sq.rank == move.from_sq.rank for m in ambiguous)
                if not same_file:
                    san += "abcdefgh"[move.from_sq.file]
                elif not same_rank:
                    san += str(move.from_sq.rank + 1)
                else:
                    san += move.from_sq.name

        if captures:
            san += "x"

        san += move.to_sq.name

        if move.is_promotion and move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    # Check / checkmate suffix
    after = board.after_move(move)
    if after.in_check(after.side_to_move):
        san += "#" if not after.generate_legal_moves() else "+"

    return san


def parse_san(board: Board, san: str) -> Move:
    """Resolve *san* to the single legal move it names for the side to move.

    Raises:
        InvalidMove: the text is malformed or no legal move matches it.
        AmbiguousMove: more than one legal move matches it.
    """
    clean = san.strip().rstrip("+#!?")
    legal = board.generate_legal_moves()

    # Castling
    side = _CASTLE_TOKENS.get(clean)
    if side is not None:
        for m in legal:
            if m.is_castle and m.castle_side == side:
                return m
        raise InvalidMove(f"Illegal move: {san}")

    match = _SAN_RE.match(clean)
    if match is None:
        raise InvalidMove(f"Unreadable move: {san!r}")

    piece_type = _SAN_PIECE_REV.get(match["piece"] or "", PieceType.PAWN)
    to_sq = Square.parse(match["to"])
    from_file = "abcdefgh".index(match["file"]) if match["file"] else None
    from_rank = int(match["rank"]) - 1 if match["rank"] else None
    wants_capture = match["capture"] is not None
    promotion = _SAN_PIECE_REV[match["promotion"]] if match["promotion"] else None

    # Find matching legal move
    candidates: list[Move] = []
    for m in legal:
        p = board[m.from_sq]
        if p is None or p.piece_type != piece_type or m.is_castle:
            continue
        if m.to_sq != to_sq:
            continue
        if promotion is not None and m.promotion != promotion:
            continue
        if from_file is not None and m.from_sq.file != from_file:
            continue
        if from_rank is not None and m.from_sq.rank != from_rank:
            continue
        if wants_capture != is_capture(board, m):
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise InvalidMove(f"Illegal move: {san}")
    raise AmbiguousMove(san, candidates)
