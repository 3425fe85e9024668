"""Tests for command parsing."""

import pytest

from chessrules.core.enums import PieceKind
from chessrules.core.move import MoveRequest
from chessrules.core.notation import AcceptDraw, NotationError, Resign, parse_command
from chessrules.core.types import A7, A8, E2, E4


class TestMoves:
    def test_plain_move(self) -> None:
        assert parse_command("e2 e4") == MoveRequest(E2, E4)

    def test_extra_whitespace(self) -> None:
        assert parse_command("  e2   e4 \n") == MoveRequest(E2, E4)

    def test_promotion(self) -> None:
        cmd = parse_command("a7 a8 N")
        assert cmd == MoveRequest(A7, A8, PieceKind.KNIGHT)

    def test_draw_offer(self) -> None:
        cmd = parse_command("e2 e4 draw?")
        assert isinstance(cmd, MoveRequest)
        assert cmd.offer_draw and cmd.promotion is None

    def test_promotion_with_draw_offer(self) -> None:
        cmd = parse_command("a7 a8 R draw?")
        assert cmd == MoveRequest(A7, A8, PieceKind.ROOK, offer_draw=True)

    def test_request_str(self) -> None:
        assert str(parse_command("a7 a8 Q draw?")) == "a7 a8 Q draw?"


class TestKeywords:
    def test_resign(self) -> None:
        assert parse_command("resign") == Resign()

    def test_accept_draw(self) -> None:
        assert parse_command("draw") == AcceptDraw()


class TestMalformed:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "e2",
            "hello",
            "e2 e9",
            "z2 e4",
            "e2 e4 K",
            "e2 e4 q",
            "e2 e4 Q N",
            "e2 e4 draw? Q",
            "e2 e4 Q draw? extra",
            "draw? e2 e4",
        ],
    )
    def test_rejected(self, text: str) -> None:
        with pytest.raises(NotationError):
            parse_command(text)

    def test_notation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_command("nonsense input")
