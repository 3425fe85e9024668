"""Piece record — a closed tagged variant over :class:`PieceKind`."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import PieceKind, Team
from chessrules.core.types import Square

# Promotion letter ↔ PieceKind
PROMOTION_LETTERS: dict[str, PieceKind] = {
    "Q": PieceKind.QUEEN,
    "R": PieceKind.ROOK,
    "B": PieceKind.BISHOP,
    "N": PieceKind.KNIGHT,
}

PROMOTION_KINDS: frozenset[PieceKind] = frozenset(PROMOTION_LETTERS.values())

_KIND_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "P",
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}

_UNICODE: dict[tuple[Team, PieceKind], str] = {
    (Team.WHITE, PieceKind.PAWN): "♙",
    (Team.WHITE, PieceKind.KNIGHT): "♘",
    (Team.WHITE, PieceKind.BISHOP): "♗",
    (Team.WHITE, PieceKind.ROOK): "♖",
    (Team.WHITE, PieceKind.QUEEN): "♕",
    (Team.WHITE, PieceKind.KING): "♔",
    (Team.BLACK, PieceKind.PAWN): "♟",
    (Team.BLACK, PieceKind.KNIGHT): "♞",
    (Team.BLACK, PieceKind.BISHOP): "♝",
    (Team.BLACK, PieceKind.ROOK): "♜",
    (Team.BLACK, PieceKind.QUEEN): "♛",
    (Team.BLACK, PieceKind.KING): "♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable snapshot of one piece.

    ``square`` is owned by :class:`~chessrules.core.board.Board`: the board's
    ``place`` mutator is the only code that produces a record with a new
    square, so the record and the grid never disagree.
    """

    id: int
    kind: PieceKind
    team: Team
    square: Square
    num_moves: int = 0
    last_move_number: int = 0  # 0 = never moved

    # ── Derived records ──────────────────────────────────────────────────

    def moved(self, square: Square, move_number: int) -> Piece:
        """Record after a completed move to *square*."""
        return replace(
            self,
            square=square,
            num_moves=self.num_moves + 1,
            last_move_number=move_number,
        )

    def at(self, square: Square) -> Piece:
        """Same piece relocated without touching its move history."""
        return replace(self, square=square)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Two-character code, e.g. ``wK`` or ``bP``."""
        prefix = "w" if self.team is Team.WHITE else "b"
        return prefix + _KIND_LETTERS[self.kind]

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.team, self.kind)]


def promotion_kind(letter: str) -> PieceKind:
    """Map a promotion letter to its kind, e.g. ``'N'`` → KNIGHT."""
    try:
        return PROMOTION_LETTERS[letter]
    except KeyError:
        raise ValueError(f"Invalid promotion piece: {letter!r}") from None
