"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Team(IntEnum):
    """Side of the board. WHITE moves on odd move numbers, BLACK on even."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Team:
        return Team(1 - self.value)

    @property
    def forward(self) -> int:
        """Row delta of a pawn advance."""
        return -1 if self is Team.WHITE else 1

    @property
    def back_rank(self) -> int:
        return 7 if self is Team.WHITE else 0

    @property
    def promotion_row(self) -> int:
        """Farthest row for this team's pawns."""
        return 0 if self is Team.WHITE else 7

    @property
    def en_passant_row(self) -> int:
        """Row a pawn must stand on to capture en passant."""
        return 3 if self is Team.WHITE else 4

    @classmethod
    def to_move(cls, move_number: int) -> Team:
        return cls.WHITE if move_number % 2 == 1 else cls.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class PieceKind(IntEnum):
    """Piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, team: Team) -> GameResult:
        return cls.WHITE_WINS if team is Team.WHITE else cls.BLACK_WINS
