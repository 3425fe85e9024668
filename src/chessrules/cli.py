"""Console front-end: two players sharing one terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TextIO

from chessrules.core.board import Board
from chessrules.core.enums import GameResult, Team
from chessrules.game.controller import GameController
from chessrules.game.interfaces import (
    GameEndReason,
    IMoveSource,
    IPresenter,
    RejectReason,
)
from chessrules.game.loop import run_game
from chessrules.settings import GameSettings, configure_logging

_LOGGER = logging.getLogger(__name__)

ILLEGAL_MOVE_MESSAGE = "Illegal move, try again"
_FILE_LEGEND = " a  b  c  d  e  f  g  h"


def render_board(board: Board, *, unicode_pieces: bool = False) -> str:
    """Text diagram, rank 8 at the top; empty dark squares are ``##``."""
    lines: list[str] = []
    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, piece in enumerate(row):
            if piece is None:
                cells.append("## " if (r + c) % 2 else "   ")
            elif unicode_pieces:
                cells.append(f"{piece.symbol}  ")
            else:
                cells.append(f"{piece} ")
        lines.append("".join(cells) + str(8 - r))
    lines.append(_FILE_LEGEND)
    return "\n".join(lines) + "\n"


class ConsoleMoveSource(IMoveSource):
    """Reads commands with a ``"White's move: "`` style prompt."""

    def __init__(self, read: Callable[[str], str] = input) -> None:
        self._read = read

    def next_command(self, team: Team) -> str:
        return self._read(f"{team}'s move: ")


class ConsolePresenter(IPresenter):
    """Prints the board and game messages to a text stream."""

    def __init__(
        self, out: TextIO | None = None, *, unicode_pieces: bool = False
    ) -> None:
        self._out = out if out is not None else sys.stdout
        self._unicode = unicode_pieces

    def show_board(self, board: Board, team_to_move: Team) -> None:
        self._print(render_board(board, unicode_pieces=self._unicode))

    def show_check(self, team: Team) -> None:
        self._print("Check")

    def show_rejection(self, reason: RejectReason) -> None:
        self._print(ILLEGAL_MOVE_MESSAGE)

    def show_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        if reason is GameEndReason.CHECKMATE:
            self._print("Checkmate")
        elif reason is GameEndReason.STALEMATE:
            self._print("Stalemate")
        if result is GameResult.WHITE_WINS:
            self._print(f"{Team.WHITE} wins")
        elif result is GameResult.BLACK_WINS:
            self._print(f"{Team.BLACK} wins")

    def _print(self, text: str) -> None:
        print(text, file=self._out)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessrules-cli",
        description="Play chess against another person in the terminal.",
    )
    parser.add_argument(
        "--unicode", action="store_true", help="draw pieces with chess symbols"
    )
    parser.add_argument(
        "--stalemate-draw",
        action="store_true",
        help="end the game as a draw on stalemate",
    )
    parser.add_argument("--log-level", default="WARNING", help="logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one console game. Returns a process exit code."""
    args = _build_parser().parse_args(argv)
    settings = GameSettings(
        stalemate_is_draw=args.stalemate_draw,
        unicode_pieces=args.unicode,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)

    controller = GameController(settings)
    presenter = ConsolePresenter(unicode_pieces=settings.unicode_pieces)
    try:
        result = run_game(controller, ConsoleMoveSource(), presenter)
    except (EOFError, KeyboardInterrupt):
        _LOGGER.info("Input closed; abandoning game")
        return 1
    _LOGGER.info("Final result: %s", result.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
