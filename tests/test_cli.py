"""Tests for the console front-end."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest

from chessrules.cli import (
    ILLEGAL_MOVE_MESSAGE,
    ConsoleMoveSource,
    ConsolePresenter,
    main,
    render_board,
)
from chessrules.core.board import Board
from chessrules.core.enums import GameResult, Team
from chessrules.game.controller import GameController
from chessrules.game.interfaces import GameEndReason, RejectReason
from chessrules.game.loop import run_game

FOOLS_MATE = "f2 f3\ne7 e5\ng2 g4\nd8 h4\n"


class TestRenderBoard:
    def test_initial_position(self) -> None:
        lines = render_board(Board.initial()).splitlines()
        assert lines[0] == "bR bN bB bQ bK bB bN bR 8"
        assert lines[1] == "bP " * 8 + "7"
        assert lines[2] == "   ## " * 4 + "6"
        assert lines[3] == "##    " * 4 + "5"
        assert lines[7] == "wR wN wB wQ wK wB wN wR 1"
        assert lines[8] == " a  b  c  d  e  f  g  h"

    def test_trailing_newline(self) -> None:
        assert render_board(Board.initial()).endswith("\n")

    def test_unicode(self) -> None:
        text = render_board(Board.initial(), unicode_pieces=True)
        assert "♔" in text and "♚" in text
        assert "wK" not in text


class TestConsoleMoveSource:
    def test_prompt_names_side(self) -> None:
        prompts: list[str] = []

        def read(prompt: str) -> str:
            prompts.append(prompt)
            return "e2 e4"

        source = ConsoleMoveSource(read)
        assert source.next_command(Team.WHITE) == "e2 e4"
        source.next_command(Team.BLACK)
        assert prompts == ["White's move: ", "Black's move: "]


class TestConsolePresenter:
    def _output(self, call: Callable[[ConsolePresenter], None]) -> str:
        out = io.StringIO()
        call(ConsolePresenter(out))
        return out.getvalue()

    def test_check(self) -> None:
        assert self._output(lambda p: p.show_check(Team.BLACK)) == "Check\n"

    def test_rejection(self) -> None:
        text = self._output(lambda p: p.show_rejection(RejectReason.NO_PIECE))
        assert text == ILLEGAL_MOVE_MESSAGE + "\n"

    def test_checkmate(self) -> None:
        text = self._output(
            lambda p: p.show_game_over(GameResult.WHITE_WINS, GameEndReason.CHECKMATE)
        )
        assert text == "Checkmate\nWhite wins\n"

    def test_resignation(self) -> None:
        text = self._output(
            lambda p: p.show_game_over(GameResult.BLACK_WINS, GameEndReason.RESIGNATION)
        )
        assert text == "Black wins\n"

    def test_agreed_draw_is_silent(self) -> None:
        text = self._output(
            lambda p: p.show_game_over(GameResult.DRAW, GameEndReason.DRAW_AGREED)
        )
        assert text == ""

    def test_stalemate(self) -> None:
        text = self._output(
            lambda p: p.show_game_over(GameResult.DRAW, GameEndReason.STALEMATE)
        )
        assert text == "Stalemate\n"


class TestScriptedGame:
    def test_transcript(self) -> None:
        lines = iter(["f2 f3", "e2 e3", "e7 e5", "g2 g4", "d8 h4"])
        out = io.StringIO()
        result = run_game(
            GameController(),
            ConsoleMoveSource(lambda _prompt: next(lines)),
            ConsolePresenter(out),
        )
        text = out.getvalue()
        assert result is GameResult.BLACK_WINS
        assert text.count(ILLEGAL_MOVE_MESSAGE) == 1
        assert text.endswith("Checkmate\nBlack wins\n")


class TestMain:
    def test_plays_game_from_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(FOOLS_MATE))
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "Checkmate" in out
        assert "Black wins" in out

    def test_end_of_input(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("e2 e4\n"))
        assert main(["--log-level", "DEBUG"]) == 1

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValueError):
            main(["--log-level", "CHATTY"])
