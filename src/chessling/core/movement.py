"""Per-piece movement templates, pseudo-legal destinations and attack detection.

Everything here looks only at occupancy: whether a destination leaves the mover's
own king in check is decided by :class:`~chessling.core.board.Board`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessling.core.enums import Color, PieceType
from chessling.core.piece import Piece
from chessling.core.types import ALL_SQUARES, Square

if TYPE_CHECKING:
    from chessling.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in ALL_SQUARES:
        moves = [sq.offset(df, dr) for df, dr in offsets]
        targets.append(tuple(to_sq for to_sq in moves if to_sq is not None))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            ray: list[Square] = []
            step = sq.offset(df, dr)
            while step is not None:
                ray.append(step)
                step = step.offset(df, dr)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


def pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else 6


def promotion_rank(color: Color) -> int:
    return 7 if color == Color.WHITE else 0


# -- Public API ---------------------------------------------------------------


def destinations(piece: Piece, sq: Square, board: Board) -> list[Square]:
    """Pseudo-legal destination squares for *piece* standing on *sq*.

    Sliders stop at the first occupied square (included when it holds an enemy
    piece). Pawns push one square, two from their starting rank through an empty
    square, and capture diagonally, including onto the board's en-passant target.
    Castling is not part of the king's template.
    """
    if piece.piece_type == PieceType.PAWN:
        return _pawn_destinations(piece.color, sq, board)
    if piece.piece_type == PieceType.KNIGHT:
        return _step_destinations(piece.color, _KNIGHT_TARGETS[sq.index], board)
    if piece.piece_type == PieceType.KING:
        return _step_destinations(piece.color, _KING_TARGETS[sq.index], board)
    return _sliding_destinations(piece.color, _SLIDER_RAYS[piece.piece_type][sq.index], board)


def attacks(piece: Piece, sq: Square, board: Board) -> list[Square]:
    """Squares *piece* on *sq* attacks, whatever stands on them."""
    if piece.piece_type == PieceType.PAWN:
        forward = piece.color.forward
        return [
            target
            for target in (sq.offset(-1, forward), sq.offset(1, forward))
            if target is not None
        ]
    if piece.piece_type == PieceType.KNIGHT:
        return list(_KNIGHT_TARGETS[sq.index])
    if piece.piece_type == PieceType.KING:
        return list(_KING_TARGETS[sq.index])

    attacked: list[Square] = []
    for ray in _SLIDER_RAYS[piece.piece_type][sq.index]:
        for to_sq in ray:
            attacked.append(to_sq)
            if board[to_sq] is not None:
                break
    return attacked


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Walks outwards from *sq* instead of generating every enemy move: a piece
    attacks *sq* exactly when *sq* can see it with the same movement pattern.
    """
    behind = -by_color.forward
    for df in (-1, 1):
        origin = sq.offset(df, behind)
        if origin is not None and board[origin] == Piece(by_color, PieceType.PAWN):
            return True

    for origin in _KNIGHT_TARGETS[sq.index]:
        if board[origin] == Piece(by_color, PieceType.KNIGHT):
            return True

    for origin in _KING_TARGETS[sq.index]:
        if board[origin] == Piece(by_color, PieceType.KING):
            return True

    if _ray_hits(board, _BISHOP_RAYS[sq.index], by_color, _DIAGONAL_ATTACKERS):
        return True
    return _ray_hits(board, _ROOK_RAYS[sq.index], by_color, _ORTHOGONAL_ATTACKERS)


# -- Piece-specific generators (private) -------------------------------------


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    kinds: tuple[PieceType, ...],
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                return True
            break
    return False


def _pawn_destinations(color: Color, sq: Square, board: Board) -> list[Square]:
    found: list[Square] = []
    forward = color.forward

    one_step = sq.offset(0, forward)
    if one_step is not None and board[one_step] is None:
        found.append(one_step)
        if sq.rank == pawn_start_rank(color):
            two_step = one_step.offset(0, forward)
            if two_step is not None and board[two_step] is None:
                found.append(two_step)

    for df in (-1, 1):
        cap_sq = sq.offset(df, forward)
        if cap_sq is None:
            continue
        target = board[cap_sq]
        if target is not None:
            if target.color != color:
                found.append(cap_sq)
        elif cap_sq == board.en_passant and color == board.side_to_move:
            found.append(cap_sq)
    return found


def _step_destinations(
    color: Color, targets: tuple[Square, ...], board: Board
) -> list[Square]:
    found: list[Square] = []
    for to_sq in targets:
        target = board[to_sq]
        if target is None or target.color != color:
            found.append(to_sq)
    return found


def _sliding_destinations(
    color: Color,
    rays: tuple[tuple[Square, ...], ...],
    board: Board,
) -> list[Square]:
    found: list[Square] = []
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                found.append(to_sq)
                continue
            if target.color != color:
                found.append(to_sq)
            break
    return found
