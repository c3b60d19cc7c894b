"""Tests for the Game state machine."""

from __future__ import annotations

import logging

import pytest

from chessling.core.enums import Color, PieceType
from chessling.core.errors import (
    AmbiguousMove,
    GameAlreadyOver,
    GameError,
    InvalidMove,
    InvalidPosition,
)
from chessling.core.notation import STARTING_FEN
from chessling.core.piece import Piece
from chessling.core.types import A8, E2
from chessling.game import (
    AcceptDraw,
    Game,
    GameOver,
    MakeMove,
    OfferDraw,
    Resign,
)


def play(game: Game, *sans: str) -> GameOver | None:
    status = None
    for san in sans:
        status = game.make_move(MakeMove(san))
    return status


class TestGameSetup:
    def test_default(self) -> None:
        game = Game()
        assert game.status is None
        assert not game.is_over
        assert game.get_turn_color() == Color.WHITE
        assert game.draw_offered_by is None
        assert game.to_fen() == STARTING_FEN
        assert len(game.legal_moves()) == 20
        assert game.history == ()

    def test_from_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        game = Game.from_fen(fen)
        assert game.get_turn_color() == Color.BLACK
        assert game.to_fen() == fen

    def test_from_fen_invalid(self) -> None:
        with pytest.raises(InvalidPosition):
            Game.from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1")

    def test_from_fen_rejects_capturable_king(self) -> None:
        with pytest.raises(InvalidPosition):
            Game.from_fen("r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 b kq - 0 1")

    def test_from_finished_position(self) -> None:
        game = Game.from_fen("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
        assert game.status == GameOver.BLACK_CHECKMATES
        assert game.legal_moves() == []

    def test_board_is_a_copy(self) -> None:
        game = Game()
        board = game.board
        board[E2] = None
        assert game.board[E2] is not None


class TestMoves:
    def test_counters_tracked(self) -> None:
        game = Game()
        play(game, "e4")
        assert game.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        play(game, "e5")
        assert game.to_fen() == "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2"
        play(game, "Nf3")
        assert game.to_fen() == (
            "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"
        )
        assert game.halfmove_clock == 1
        assert game.fullmove_number == 2

    def test_to_fen_counter_override(self) -> None:
        game = Game()
        assert game.to_fen(5, 10).endswith(" 5 10")
        assert game.to_fen(halfmove_clock=7).endswith(" 7 1")

    def test_invalid_move_leaves_game_unchanged(self) -> None:
        game = Game()
        with pytest.raises(InvalidMove):
            game.make_move(MakeMove("e5"))
        assert game.get_turn_color() == Color.WHITE
        assert game.to_fen() == STARTING_FEN

    def test_ambiguous_move(self) -> None:
        game = Game.from_fen("4k3/8/8/8/8/2N3N1/8/4K3 w - - 0 1")
        with pytest.raises(AmbiguousMove):
            game.make_move(MakeMove("Ne4"))
        assert game.make_move(MakeMove("Nce4")) is None

    def test_errors_share_a_base(self) -> None:
        game = Game()
        with pytest.raises(GameError):
            game.make_move(MakeMove("Qh5"))

    def test_history_records(self) -> None:
        game = Game()
        play(game, "e4", "d5", "exd5")
        assert [record.san for record in game.history] == ["e4", "d5", "exd5"]
        last = game.history[-1]
        assert last.color == Color.WHITE
        assert last.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert last.fen_after == game.to_fen()
        assert game.captured_pieces(Color.WHITE) == [Piece(Color.BLACK, PieceType.PAWN)]
        assert game.captured_pieces(Color.BLACK) == []

    def test_promotion(self) -> None:
        game = Game.from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        assert game.make_move(MakeMove("a8=Q")) is None
        assert game.board[A8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert game.history[-1].san == "a8=Q+"
        assert game.history[-1].was_check


class TestTerminalStates:
    def test_fools_mate(self) -> None:
        game = Game()
        assert play(game, "f3", "e5", "g4") is None
        assert game.make_move(MakeMove("Qh4#")) == GameOver.BLACK_CHECKMATES
        assert game.is_over
        assert game.status.winner == Color.BLACK

    def test_no_action_after_game_over(self) -> None:
        game = Game()
        play(game, "f3", "e5", "g4", "Qh4")
        fen = game.to_fen()
        for action in (MakeMove("a3"), OfferDraw("a3"), AcceptDraw(), Resign()):
            with pytest.raises(GameAlreadyOver):
                game.make_move(action)
        assert game.to_fen() == fen
        assert game.status == GameOver.BLACK_CHECKMATES

    def test_stalemate(self) -> None:
        game = Game.from_fen("7k/8/6K1/8/8/8/8/5Q2 w - - 0 1")
        assert game.make_move(MakeMove("Qf7")) == GameOver.STALEMATE
        assert game.status.is_draw

    def test_white_resigns(self) -> None:
        game = Game()
        assert game.make_move(Resign()) == GameOver.WHITE_RESIGNS
        assert game.status.winner == Color.BLACK

    def test_black_resigns(self) -> None:
        game = Game()
        play(game, "e4")
        assert game.make_move(Resign()) == GameOver.BLACK_RESIGNS
        assert game.status.winner == Color.WHITE

    def test_logs_game_over(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="chessling.game.state")
        game = Game()
        play(game, "f3", "e5", "g4", "Qh4")
        assert any("BLACK_CHECKMATES" in rec.getMessage() for rec in caplog.records)


class TestDrawOffers:
    def test_offer_and_accept(self) -> None:
        game = Game()
        assert game.make_move(OfferDraw("e4")) is None
        assert game.draw_offered_by == Color.WHITE
        assert game.get_turn_color() == Color.BLACK
        assert game.make_move(AcceptDraw()) == GameOver.DRAW_ACCEPTED
        assert game.status.is_draw

    def test_accept_without_offer(self) -> None:
        game = Game()
        with pytest.raises(InvalidMove):
            game.make_move(AcceptDraw())
        assert not game.is_over

    def test_offer_cleared_by_next_move(self) -> None:
        game = Game()
        game.make_move(OfferDraw("e4"))
        game.make_move(MakeMove("e5"))
        assert game.draw_offered_by is None
        with pytest.raises(InvalidMove):
            game.make_move(AcceptDraw())

    def test_offer_survives_rejected_move(self) -> None:
        game = Game()
        game.make_move(OfferDraw("e4"))
        with pytest.raises(InvalidMove):
            game.make_move(MakeMove("e4"))
        assert game.draw_offered_by == Color.WHITE

    def test_offer_with_illegal_move_is_rejected(self) -> None:
        game = Game()
        with pytest.raises(InvalidMove):
            game.make_move(OfferDraw("e5"))
        assert game.draw_offered_by is None

    def test_counter_offer(self) -> None:
        game = Game()
        game.make_move(OfferDraw("e4"))
        game.make_move(OfferDraw("e5"))
        assert game.draw_offered_by == Color.BLACK
        assert game.make_move(AcceptDraw()) == GameOver.DRAW_ACCEPTED


class TestGameOverEnum:
    @pytest.mark.parametrize(
        ("status", "winner"),
        [
            (GameOver.WHITE_CHECKMATES, Color.WHITE),
            (GameOver.BLACK_CHECKMATES, Color.BLACK),
            (GameOver.WHITE_RESIGNS, Color.BLACK),
            (GameOver.BLACK_RESIGNS, Color.WHITE),
            (GameOver.STALEMATE, None),
            (GameOver.DRAW_ACCEPTED, None),
        ],
    )
    def test_winner(self, status: GameOver, winner: Color | None) -> None:
        assert status.winner == winner
        assert status.is_draw == (winner is None)
