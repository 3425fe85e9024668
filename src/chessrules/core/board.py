"""Board - piece records on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Mapping

from chessrules.core.enums import PieceKind, Team
from chessrules.core.piece import Piece
from chessrules.core.types import (
    Square,
    make_square,
    parse_square,
    square_index,
    square_name,
)

_TEAM_CODES: dict[str, Team] = {"w": Team.WHITE, "b": Team.BLACK}
_KIND_CODES: dict[str, PieceKind] = {
    "P": PieceKind.PAWN,
    "N": PieceKind.KNIGHT,
    "B": PieceKind.BISHOP,
    "R": PieceKind.ROOK,
    "Q": PieceKind.QUEEN,
    "K": PieceKind.KING,
}

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """Mutable board: an arena of piece records plus a grid of piece ids.

    ``_pieces[id]`` holds the live record for every piece still on the board
    (``None`` once captured or promoted away); ``_grid`` maps each of the 64
    squares to an optional id.  :meth:`place` is the single mutator that
    moves an id between squares and rewrites the record's ``square``.
    """

    __slots__ = ("_pieces", "_grid", "_king_ids")

    def __init__(self) -> None:
        self._pieces: list[Piece | None] = []
        self._grid: list[int | None] = [None] * 64
        # [team] -> id of that team's king (None until one is added).
        self._king_ids: list[int | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        piece_id = self._grid[square_index(sq)]
        return None if piece_id is None else self._pieces[piece_id]

    def get(self, sq: Square) -> Piece | None:
        return self[sq]

    def is_empty(self, sq: Square) -> bool:
        return self._grid[square_index(sq)] is None

    def piece(self, piece_id: int) -> Piece:
        """Live record for *piece_id*."""
        if not 0 <= piece_id < len(self._pieces):
            raise KeyError(f"Unknown piece id {piece_id}")
        piece = self._pieces[piece_id]
        if piece is None:
            raise KeyError(f"Piece {piece_id} is no longer on the board")
        return piece

    def is_on_board(self, piece_id: int) -> bool:
        return 0 <= piece_id < len(self._pieces) and self._pieces[piece_id] is not None

    # -- Mutation -----------------------------------------------------------

    def add(self, kind: PieceKind, team: Team, sq: Square) -> Piece:
        """Create a fresh piece on *sq*, capturing any occupant."""
        if kind is PieceKind.KING and self._king_ids[team] is not None:
            raise ValueError(f"{team.name} already has a king")
        piece = Piece(len(self._pieces), kind, team, sq)
        self._pieces.append(piece)
        self._occupy(piece.id, sq)
        if kind is PieceKind.KING:
            self._king_ids[team] = piece.id
        return piece

    def place(self, piece_id: int, sq: Square) -> Piece:
        """Move *piece_id* to *sq*, capturing whatever stood there.

        Returns the updated record.  Move counters are not touched; see
        :meth:`record_move`.
        """
        piece = self.piece(piece_id)
        self._grid[square_index(piece.square)] = None
        relocated = piece.at(sq)
        self._pieces[piece_id] = relocated
        self._occupy(piece_id, sq)
        return relocated

    def record_move(self, piece_id: int, move_number: int) -> Piece:
        """Bump the move counters of *piece_id* after a completed move."""
        piece = self.piece(piece_id)
        updated = piece.moved(piece.square, move_number)
        self._pieces[piece_id] = updated
        return updated

    def remove(self, sq: Square) -> Piece | None:
        """Capture the occupant of *sq* (if any) and return its last record."""
        idx = square_index(sq)
        piece_id = self._grid[idx]
        if piece_id is None:
            return None
        captured = self._pieces[piece_id]
        self._grid[idx] = None
        self._pieces[piece_id] = None
        return captured

    def replace(self, sq: Square, kind: PieceKind) -> Piece:
        """Swap the occupant of *sq* for a brand-new piece of *kind*."""
        old = self[sq]
        if old is None:
            raise ValueError(f"No piece on {square_name(sq)}")
        self.remove(sq)
        return self.add(kind, old.team, sq)

    def _occupy(self, piece_id: int, sq: Square) -> None:
        idx = square_index(sq)
        previous = self._grid[idx]
        if previous is not None and previous != piece_id:
            self._pieces[previous] = None
        self._grid[idx] = piece_id

    # -- Query helpers ------------------------------------------------------

    def king(self, team: Team) -> Piece:
        """Return the king record for *team*."""
        king_id = self._king_ids[team]
        if king_id is None or self._pieces[king_id] is None:
            raise ValueError(f"No {team.name} king on board")
        return self._pieces[king_id]  # type: ignore[return-value]

    def pieces(self, team: Team) -> list[Piece]:
        """All of *team*'s pieces in board order (rank 8 → rank 1, a → h)."""
        result: list[Piece] = []
        for piece_id in self._grid:
            if piece_id is None:
                continue
            piece = self._pieces[piece_id]
            if piece is not None and piece.team is team:
                result.append(piece)
        return result

    def rows(self) -> list[list[Piece | None]]:
        """Occupancy as 8 rows of 8 entries, rank 8 first."""
        return [[self[make_square(r, c)] for c in range(8)] for r in range(8)]

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._pieces = self._pieces.copy()
        b._grid = self._grid.copy()
        b._king_ids = self._king_ids.copy()
        return b

    def clear(self) -> None:
        self._pieces = []
        self._grid = [None] * 64
        self._king_ids = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, kind in enumerate(_BACK_RANK):
            b.add(kind, Team.WHITE, make_square(7, col))
            b.add(kind, Team.BLACK, make_square(0, col))
        for col in range(8):
            b.add(PieceKind.PAWN, Team.WHITE, make_square(6, col))
            b.add(PieceKind.PAWN, Team.BLACK, make_square(1, col))
        return b

    @classmethod
    def from_codes(cls, layout: Mapping[str, str]) -> Board:
        """Build a board from ``{"e1": "wK", "e8": "bK", ...}``.

        Every piece starts with fresh move counters.
        """
        b = cls()
        for name, code in layout.items():
            if (
                len(code) != 2
                or code[0] not in _TEAM_CODES
                or code[1] not in _KIND_CODES
            ):
                raise ValueError(f"Invalid piece code: {code!r}")
            b.add(_KIND_CODES[code[1]], _TEAM_CODES[code[0]], parse_square(name))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.rows() == other.rows()

    def __repr__(self) -> str:
        lines: list[str] = []
        for r, row in enumerate(self.rows()):
            cells = [str(p) if p else ".." for p in row]
            lines.append(f"{' '.join(cells)} {8 - r}")
        lines.append(" a  b  c  d  e  f  g  h")
        return "\n".join(lines)
