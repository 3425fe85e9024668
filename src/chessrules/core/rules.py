"""High-level chess rules: check, checkmate, stalemate, game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import GameResult, Team
from chessrules.core.move_validator import MoveValidator

if TYPE_CHECKING:
    from chessrules.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Product policy:
    # - Checkmate ends the game.
    # - Stalemate ends the game as a draw only when the caller opts in.

    @staticmethod
    def is_in_check(board: Board, team: Team) -> bool:
        return MoveValidator(board).is_in_check(team)

    @staticmethod
    def is_checkmate(board: Board, team: Team, move_number: int | None = None) -> bool:
        return MoveValidator(board).is_checkmate(team, move_number)

    @staticmethod
    def is_stalemate(board: Board, team: Team, move_number: int | None = None) -> bool:
        return MoveValidator(board).is_stalemate(team, move_number)

    @staticmethod
    def game_result(
        board: Board,
        team_to_move: Team,
        move_number: int | None = None,
        *,
        stalemate_is_draw: bool = False,
    ) -> GameResult:
        """Determine the result from *team_to_move*'s point of view."""
        validator = MoveValidator(board)
        if validator.has_legal_move(team_to_move, move_number):
            return GameResult.IN_PROGRESS
        if validator.is_in_check(team_to_move):
            return GameResult.win_for(team_to_move.opposite)
        if stalemate_is_draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
