"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, MoveExecutor, Team, parse_square

    board = Board.initial()
    executor = MoveExecutor(board)
    pawn = board[parse_square("e2")]
    executor.attempt_move_to(pawn.id, parse_square("e4"), move_number=1)
"""

from chessrules.core.board import Board
from chessrules.core.enums import GameResult, MoveFlag, PieceKind, Team
from chessrules.core.executor import MoveExecutor, will_promote
from chessrules.core.move import Move, MoveRequest
from chessrules.core.move_validator import MoveValidator
from chessrules.core.notation import (
    AcceptDraw,
    Command,
    NotationError,
    Resign,
    parse_command,
)
from chessrules.core.piece import PROMOTION_KINDS, Piece, promotion_kind
from chessrules.core.rules import Rules
from chessrules.core.types import (
    Square,
    in_bounds,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "GameResult",
    "MoveFlag",
    "PieceKind",
    "Team",
    # Types / helpers
    "Square",
    "in_bounds",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveExecutor",
    "MoveRequest",
    "MoveValidator",
    "PROMOTION_KINDS",
    "Piece",
    "Rules",
    "promotion_kind",
    "will_promote",
    # Commands
    "AcceptDraw",
    "Command",
    "NotationError",
    "Resign",
    "parse_command",
]
