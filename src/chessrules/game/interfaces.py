"""Abstract interfaces and state enums for the game layer.

The controller only talks to its collaborators through these ABCs, so a
console loop, a Qt window or a test double can drive the same game.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessrules.core.enums import GameResult, Team

if TYPE_CHECKING:
    from chessrules.core.board import Board


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    NONE = 0
    CHECKMATE = auto()
    RESIGNATION = auto()
    DRAW_AGREED = auto()
    STALEMATE = auto()


class RejectReason(IntEnum):
    """Why an action was refused. The game state is unchanged in every case."""

    MALFORMED_INPUT = auto()
    NOT_STARTED = auto()
    GAME_OVER = auto()
    NOT_YOUR_TURN = auto()
    DRAW_OFFER_PENDING = auto()
    NO_PIECE = auto()
    OPPONENT_PIECE = auto()
    ILLEGAL_MOVE = auto()
    PROMOTION_NOT_ALLOWED = auto()
    NO_DRAW_OFFER = auto()


# ── Abstract collaborators ───────────────────────────────────────────────────


class IMoveSource(ABC):
    """Supplies one line of player input per request."""

    @abstractmethod
    def next_command(self, team: Team) -> str:
        """Block until *team*'s player has entered a command."""


class IPresenter(ABC):
    """Renders board state and game messages."""

    @abstractmethod
    def show_board(self, board: Board, team_to_move: Team) -> None:
        """Display the full board before *team_to_move* acts."""

    @abstractmethod
    def show_check(self, team: Team) -> None:
        """*team*'s king is in check."""

    @abstractmethod
    def show_rejection(self, reason: RejectReason) -> None:
        """The last action was refused."""

    @abstractmethod
    def show_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        """The game has ended."""
