"""Perft tests — the gold standard for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from chessling.core.board import Board
from chessling.core.notation import STARTING_FEN


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth* using board copies."""
    if depth == 0:
        return 1
    moves = board.generate_legal_moves()
    if depth == 1:
        return len(moves)
    return sum(perft(board.after_move(move), depth - 1) for move in moves)


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(Board.from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(Board.from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(Board.from_fen(STARTING_FEN), 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(Board.from_fen(STARTING_FEN), 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(Board.from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(Board.from_fen(KIWIPETE), 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(Board.from_fen(KIWIPETE), 3) == 97_862


# ── Position 3 (en passant and rook endgame edge cases) ──────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPosition3:
    def test_depth_1(self) -> None:
        assert perft(Board.from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(Board.from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(Board.from_fen(POS3), 3) == 2_812

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(Board.from_fen(POS3), 4) == 43_238


# ── Position 4 (promotions and castling under attack) ────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPosition4:
    def test_depth_1(self) -> None:
        assert perft(Board.from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(Board.from_fen(POS4), 2) == 264

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(Board.from_fen(POS4), 3) == 9_467


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPosition5:
    def test_depth_1(self) -> None:
        assert perft(Board.from_fen(POS5), 1) == 44

    def test_depth_2(self) -> None:
        assert perft(Board.from_fen(POS5), 2) == 1_486

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(Board.from_fen(POS5), 3) == 62_379
