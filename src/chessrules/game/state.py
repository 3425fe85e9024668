"""Game session record — board, move counter, draw offers, history."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import GameResult, PieceKind, Team
from chessrules.core.move import Move
from chessrules.game.interfaces import GameEndReason, GamePhase


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    team: Team
    move: Move
    promotion: PieceKind | None = None
    offered_draw: bool = False


@dataclass
class GameState:
    """Everything one game needs between turns.

    This is a pure data/logic class with no I/O. Several independent games can
    run side by side, each with its own instance.
    """

    board: Board = field(default_factory=Board.initial)
    current_move_number: int = 1
    white_offering: bool = False
    black_offering: bool = False
    phase: GamePhase = GamePhase.NOT_STARTED
    result: GameResult = GameResult.IN_PROGRESS
    end_reason: GameEndReason = GameEndReason.NONE
    move_history: list[MoveRecord] = field(default_factory=list)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, board: Board | None = None) -> None:
        """Initialise (or reset) the game."""
        self.board = board if board is not None else Board.initial()
        self.current_move_number = 1
        self.white_offering = False
        self.black_offering = False
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.move_history.clear()

    # ── Turn bookkeeping ─────────────────────────────────────────────────

    def complete_half_move(self, record: MoveRecord) -> None:
        """Log *record* and hand the turn to the other side."""
        self.move_history.append(record)
        if record.offered_draw:
            self.set_offering(record.team, True)
        self.current_move_number += 1

    # ── Draw offers ──────────────────────────────────────────────────────

    def is_offering(self, team: Team) -> bool:
        return self.white_offering if team is Team.WHITE else self.black_offering

    def set_offering(self, team: Team, offering: bool) -> None:
        if team is Team.WHITE:
            self.white_offering = offering
        else:
            self.black_offering = offering

    @property
    def opponent_offer_pending(self) -> bool:
        """Whether the side to move faces an unanswered draw offer."""
        return self.is_offering(self.side_to_move.opposite)

    # ── Termination ──────────────────────────────────────────────────────

    def resign(self, team: Team) -> None:
        self.finish(GameResult.win_for(team.opposite), GameEndReason.RESIGNATION)

    def set_draw(self, reason: GameEndReason = GameEndReason.DRAW_AGREED) -> None:
        self.finish(GameResult.DRAW, reason)

    def finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.phase = GamePhase.GAME_OVER

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Team:
        return Team.to_move(self.current_move_number)

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1].move if self.move_history else None
