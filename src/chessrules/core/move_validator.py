"""Move legality for every piece kind, plus king-safety queries.

All hypothetical moves are played out on :meth:`Board.copy` snapshots; the
board handed to :class:`MoveValidator` is never written to.
"""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import MoveFlag, PieceKind, Team
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, Square, in_bounds, make_square

_SLIDERS: frozenset[PieceKind] = frozenset(
    (PieceKind.BISHOP, PieceKind.ROOK, PieceKind.QUEEN)
)

# Castling geometry per side: (king target col, rook corner col, rook target
# col, columns that must be empty, columns the king crosses or lands on).
_CASTLING: dict[MoveFlag, tuple[int, int, int, tuple[int, ...], tuple[int, ...]]] = {
    MoveFlag.CASTLE_KINGSIDE: (6, 7, 5, (5, 6), (5, 6)),
    MoveFlag.CASTLE_QUEENSIDE: (2, 0, 3, (1, 2, 3), (3, 2)),
}

_KING_START_COL = 4


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


class MoveValidator:
    """Answers legality questions about a :class:`Board`.

    ``check_self_king_safety=False`` evaluates raw reachability only.  The
    check oracle relies on that mode so that asking whether an enemy piece
    attacks a square never recurses into the enemy king's own safety.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def board(self) -> Board:
        return self._board

    # -- Piece legality -----------------------------------------------------

    def can_move_to(
        self,
        piece: Piece,
        target: Square,
        check_self_king_safety: bool = True,
    ) -> bool:
        """Whether *piece* may make an ordinary move to *target*.

        En passant and castling are not ordinary moves; see
        :meth:`can_en_passant` and :meth:`castling_flag`.
        """
        row, col = target
        if not in_bounds(row, col):
            return False
        if target == piece.square:
            return False

        occupant = self._board[target]
        if occupant is not None and occupant.team is piece.team:
            return False

        if not self._geometry_allows(piece, target, occupant):
            return False

        if piece.kind in _SLIDERS and not self._path_clear(piece.square, target):
            return False

        if not check_self_king_safety:
            return True

        if piece.kind is PieceKind.KING:
            return not self.is_in_check_at(piece.team, target)
        return not self._leaves_king_in_check(piece, target)

    def _geometry_allows(
        self, piece: Piece, target: Square, occupant: Piece | None
    ) -> bool:
        dr = target[0] - piece.square[0]
        dc = target[1] - piece.square[1]
        dist_sq = dr * dr + dc * dc

        match piece.kind:
            case PieceKind.PAWN:
                return self._pawn_geometry(piece, dr, dc, occupant)
            case PieceKind.KNIGHT:
                return dist_sq == 5
            case PieceKind.BISHOP:
                return dr * dr == dc * dc
            case PieceKind.ROOK:
                return dr == 0 or dc == 0
            case PieceKind.QUEEN:
                return dr * dr == dc * dc or dr == 0 or dc == 0
            case PieceKind.KING:
                return dist_sq in (1, 2)
        raise ValueError(f"Unknown piece kind: {piece.kind!r}")

    def _pawn_geometry(
        self, piece: Piece, dr: int, dc: int, occupant: Piece | None
    ) -> bool:
        forward = piece.team.forward
        if dr == forward:
            if dc == 0:
                return occupant is None
            # Diagonal step only as a capture
            return abs(dc) == 1 and occupant is not None
        if dr == 2 * forward and dc == 0 and piece.num_moves == 0:
            between = make_square(piece.square[0] + forward, piece.square[1])
            return occupant is None and self._board.is_empty(between)
        return False

    def _path_clear(self, origin: Square, target: Square) -> bool:
        """Every square strictly between *origin* and *target* is empty."""
        step_r = _sign(target[0] - origin[0])
        step_c = _sign(target[1] - origin[1])
        r, c = origin[0] + step_r, origin[1] + step_c
        while (r, c) != target:
            if not self._board.is_empty((r, c)):
                return False
            r += step_r
            c += step_c
        return True

    # -- En passant ---------------------------------------------------------

    def can_en_passant(self, piece: Piece, target: Square, move_number: int) -> bool:
        """Whether *piece* may capture en passant onto *target* on *move_number*."""
        if piece.kind is not PieceKind.PAWN:
            return False
        row, col = piece.square
        if row != piece.team.en_passant_row:
            return False
        if not in_bounds(*target) or target[0] != row + piece.team.forward:
            return False
        if abs(target[1] - col) != 1 or not self._board.is_empty(target):
            return False

        victim_sq = make_square(row, target[1])
        victim = self._board[victim_sq]
        if (
            victim is None
            or victim.kind is not PieceKind.PAWN
            or victim.team is piece.team
        ):
            return False
        # The victim must have just made its opening double step.
        if victim.last_move_number != move_number - 1 or victim.num_moves != 1:
            return False

        return not self._leaves_king_in_check(piece, target, capture_sq=victim_sq)

    # -- Castling -----------------------------------------------------------

    def castling_flag(self, king: Piece, target: Square) -> MoveFlag | None:
        """Castling side if *king* may castle onto *target*, else ``None``."""
        if king.kind is not PieceKind.KING or king.num_moves != 0:
            return None
        back = king.team.back_rank
        if king.square != make_square(back, _KING_START_COL) or target[0] != back:
            return None

        for flag, (king_col, rook_col, _, empty_cols, safe_cols) in _CASTLING.items():
            if target[1] != king_col:
                continue
            rook = self._board[make_square(back, rook_col)]
            if (
                rook is None
                or rook.kind is not PieceKind.ROOK
                or rook.team is not king.team
                or rook.num_moves != 0
            ):
                return None
            if not all(self._board.is_empty(make_square(back, c)) for c in empty_cols):
                return None
            if self.is_in_check(king.team):
                return None
            if any(
                self.is_in_check_at(king.team, make_square(back, c)) for c in safe_cols
            ):
                return None
            return flag
        return None

    @staticmethod
    def castling_rook_squares(team: Team, flag: MoveFlag) -> tuple[Square, Square]:
        """(rook origin, rook destination) for a castling move."""
        _, rook_col, rook_target_col, _, _ = _CASTLING[flag]
        back = team.back_rank
        return make_square(back, rook_col), make_square(back, rook_target_col)

    # -- King safety --------------------------------------------------------

    def is_in_check(self, team: Team) -> bool:
        """Is *team*'s king currently attacked?"""
        return self.is_in_check_at(team, self._board.king(team).square)

    def is_in_check_at(self, team: Team, square: Square) -> bool:
        """Would *team*'s king be attacked if it stood on *square*?"""
        trial = self._board.copy()
        king = trial.king(team)
        if king.square != square:
            trial.place(king.id, square)
        oracle = MoveValidator(trial)
        return any(
            oracle.can_move_to(enemy, square, check_self_king_safety=False)
            for enemy in trial.pieces(team.opposite)
        )

    def _leaves_king_in_check(
        self, piece: Piece, target: Square, capture_sq: Square | None = None
    ) -> bool:
        trial = self._board.copy()
        if capture_sq is not None:
            trial.remove(capture_sq)
        trial.place(piece.id, target)
        return MoveValidator(trial).is_in_check(piece.team)

    # -- Whole-team queries -------------------------------------------------

    def legal_targets(self, piece: Piece, move_number: int | None = None) -> list[Square]:
        """Every square *piece* may legally move to.

        En passant is only considered when *move_number* is given, since its
        legality depends on the timing of the victim's last move.
        """
        targets: list[Square] = []
        for sq in ALL_SQUARES:
            if self.can_move_to(piece, sq):
                targets.append(sq)
            elif move_number is not None and self.can_en_passant(piece, sq, move_number):
                targets.append(sq)
            elif (
                piece.kind is PieceKind.KING
                and self.castling_flag(piece, sq) is not None
            ):
                targets.append(sq)
        return targets

    def has_legal_move(self, team: Team, move_number: int | None = None) -> bool:
        """Whether any of *team*'s pieces has at least one legal destination."""
        for piece in self._board.pieces(team):
            for sq in ALL_SQUARES:
                if self.can_move_to(piece, sq):
                    return True
                if move_number is not None and self.can_en_passant(
                    piece, sq, move_number
                ):
                    return True
        return False

    def is_checkmate(self, team: Team, move_number: int | None = None) -> bool:
        """In check with no legal move for any piece of *team*."""
        if not self.is_in_check(team):
            return False
        return not self.has_legal_move(team, move_number)

    def is_stalemate(self, team: Team, move_number: int | None = None) -> bool:
        """Not in check, yet no piece of *team* can move."""
        if self.is_in_check(team):
            return False
        return not self.has_legal_move(team, move_number)
