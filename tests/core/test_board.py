"""Tests for Board state, legality and move application."""

import pytest

from chessling.core.board import Board
from chessling.core.enums import CastleSide, CastlingRights, Color, PieceType
from chessling.core.errors import InvalidMove
from chessling.core.move import Move
from chessling.core.piece import Piece
from chessling.core.types import (
    A1,
    A7,
    A8,
    B5,
    C1,
    C6,
    D1,
    D5,
    D6,
    D8,
    E1,
    E2,
    E3,
    E4,
    E5,
    E6,
    E7,
    F1,
    G1,
    H1,
    H4,
)

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"


class TestBoardBasics:
    def test_initial_placement(self, start_board: Board) -> None:
        assert start_board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert start_board[D8] == Piece(Color.BLACK, PieceType.QUEEN)
        assert start_board[E4] is None
        assert start_board.side_to_move == Color.WHITE
        assert start_board.castling == CastlingRights.ALL
        assert start_board.en_passant is None

    def test_occupancy_queries(self, start_board: Board) -> None:
        assert start_board.get_piece(E2) == Piece(Color.WHITE, PieceType.PAWN)
        assert start_board.is_empty(E4)
        assert start_board.has_ally_piece(E2, Color.WHITE)
        assert not start_board.has_ally_piece(E2, Color.BLACK)
        assert start_board.has_enemy_piece(E7, Color.WHITE)
        assert not start_board.has_enemy_piece(E4, Color.WHITE)
        assert start_board.get_turn_color() == Color.WHITE

    def test_king_square(self, start_board: Board) -> None:
        assert start_board.king_square(Color.WHITE) == E1
        assert start_board.king_square(Color.BLACK).name == "e8"

    def test_missing_king_is_programming_error(self) -> None:
        board = Board()
        with pytest.raises(RuntimeError):
            board.in_check(Color.WHITE)

    def test_material(self, start_board: Board) -> None:
        assert start_board.material(Color.WHITE) == 3900
        assert start_board.material(Color.BLACK) == 3900

    def test_copy_is_independent(self, start_board: Board) -> None:
        clone = start_board.copy()
        assert clone == start_board
        clone[E2] = None
        assert clone != start_board
        assert start_board[E2] is not None

    def test_pieces_filter(self, start_board: Board) -> None:
        assert start_board.pieces(Color.WHITE, PieceType.KING) == [E1]
        assert len(start_board.pieces(Color.BLACK)) == 16


class TestMoveApplication:
    def test_double_push_sets_en_passant(self, start_board: Board) -> None:
        captured = start_board.play_move(Move.normal(E2, E4))
        assert captured is None
        assert start_board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert start_board[E2] is None
        assert start_board.en_passant == E3
        assert start_board.side_to_move == Color.BLACK

    def test_en_passant_cleared_by_next_move(self, start_board: Board) -> None:
        start_board.play_move(Move.normal(E2, E4))
        start_board.play_move(Move.normal(E7, E6))
        assert start_board.en_passant is None

    def test_illegal_move_raises_and_leaves_board(self, start_board: Board) -> None:
        before = start_board.copy()
        with pytest.raises(InvalidMove):
            start_board.play_move(Move.normal(E2, E5))
        with pytest.raises(InvalidMove):
            start_board.play_move(Move.normal(E7, E5))  # black pawn on white's turn
        assert start_board == before

    def test_after_move_leaves_original(self, start_board: Board) -> None:
        after = start_board.after_move(Move.normal(E2, E4))
        assert after[E4] is not None
        assert start_board[E4] is None
        assert start_board.side_to_move == Color.WHITE

    def test_en_passant_capture(self) -> None:
        board = Board.from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        move = Move.en_passant(E5, D6)
        assert move in board.generate_legal_moves()
        captured = board.play_move(move)
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert board[D5] is None
        assert board[D6] == Piece(Color.WHITE, PieceType.PAWN)

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        board = Board.from_fen("8/8/8/KPp4r/8/8/8/4k3 w - c6 0 1")
        move = Move.en_passant(B5, C6)
        assert not board.is_legal_move(move)
        assert move not in board.generate_legal_moves()

    def test_promotion(self) -> None:
        board = Board.from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        promos = [m for m in board.generate_legal_moves() if m.from_sq == A7]
        assert [m.promotion for m in promos] == [
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        ]
        board.play_move(Move.promote(A7, A8, PieceType.KNIGHT))
        assert board[A8] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert board[A7] is None


class TestCastling:
    def test_both_sides_available(self, castling_board: Board) -> None:
        legal = castling_board.generate_legal_moves()
        assert Move.castle(Color.WHITE, CastleSide.KINGSIDE) in legal
        assert Move.castle(Color.WHITE, CastleSide.QUEENSIDE) in legal

    def test_kingside_castle_moves_rook(self, castling_board: Board) -> None:
        castling_board.play_move(Move.castle(Color.WHITE, CastleSide.KINGSIDE))
        assert castling_board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert castling_board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert castling_board[H1] is None
        assert castling_board[E1] is None
        assert castling_board.castling == CastlingRights.BLACK_BOTH

    def test_queenside_castle_moves_rook(self, castling_board: Board) -> None:
        castling_board.play_move(Move.castle(Color.WHITE, CastleSide.QUEENSIDE))
        assert castling_board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert castling_board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert castling_board[A1] is None

    def test_cannot_castle_through_attacked_square(self) -> None:
        board = Board.from_fen("r3k2r/8/8/8/8/8/5r2/R3K2R w KQkq - 0 1")
        legal = board.generate_legal_moves()
        assert Move.castle(Color.WHITE, CastleSide.KINGSIDE) not in legal
        assert Move.castle(Color.WHITE, CastleSide.QUEENSIDE) in legal

    def test_cannot_castle_out_of_check(self) -> None:
        board = Board.from_fen("4k3/8/8/8/8/8/4r3/R3K2R w KQ - 0 1")
        assert not any(m.is_castle for m in board.generate_legal_moves())

    def test_cannot_castle_through_pieces(self, start_board: Board) -> None:
        assert not any(m.is_castle for m in start_board.generate_legal_moves())

    def test_king_move_clears_rights(self, castling_board: Board) -> None:
        castling_board.play_move(Move.normal(E1, E2))
        assert castling_board.castling == CastlingRights.BLACK_BOTH

    def test_rook_capture_clears_both_sides_rights(self, castling_board: Board) -> None:
        castling_board.play_move(Move.capture(A1, A8))
        assert castling_board.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE
        )


class TestCheckDetection:
    def test_checkmate(self) -> None:
        board = Board.from_fen(FOOLS_MATE)
        assert board.in_check(Color.WHITE)
        assert board.is_checkmate(Color.WHITE)
        assert not board.is_stalemate(Color.WHITE)
        assert board[H4] == Piece(Color.BLACK, PieceType.QUEEN)

    def test_stalemate(self) -> None:
        board = Board.from_fen(STALEMATE)
        assert not board.in_check(Color.BLACK)
        assert board.is_stalemate(Color.BLACK)
        assert not board.is_checkmate(Color.BLACK)
        assert board.generate_legal_moves() == []

    def test_pinned_piece_cannot_move(self) -> None:
        board = Board.from_fen("4r1k1/8/8/8/8/8/4N3/4K3 w - - 0 1")
        assert not any(m.from_sq == E2 for m in board.generate_legal_moves())
        assert any(m.from_sq == E2 for m in board.generate_pseudo_legal_moves())

    def test_in_check_only_king_escapes_or_blocks(self) -> None:
        board = Board.from_fen("4k3/8/8/8/8/8/4r3/R3K2R w KQ - 0 1")
        for move in board.generate_legal_moves():
            assert not board.after_move(move).in_check(Color.WHITE)


class TestGenerationOrder:
    def test_start_position_order(self, start_board: Board) -> None:
        moves = [str(m) for m in start_board.generate_legal_moves()]
        assert len(moves) == 20
        assert moves[:6] == ["b1a3", "b1c3", "g1f3", "g1h3", "a2a3", "a2a4"]

    def test_sorted_by_source_then_destination(self) -> None:
        board = Board.from_fen(
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        )
        keys = [
            (m.from_sq.index, m.to_sq.index)
            for m in board.generate_legal_moves()
            if not m.is_castle
        ]
        assert keys == sorted(keys)
