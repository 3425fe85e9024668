"""Applies validated moves to a :class:`Board`."""

from __future__ import annotations

import logging

from chessrules.core.board import Board
from chessrules.core.enums import MoveFlag, PieceKind
from chessrules.core.move import Move
from chessrules.core.move_validator import MoveValidator
from chessrules.core.piece import PROMOTION_KINDS, Piece
from chessrules.core.types import Square, make_square, square_name

_LOGGER = logging.getLogger(__name__)


def will_promote(piece: Piece, target_row: int) -> bool:
    """Whether *piece* is a pawn that would promote on *target_row*."""
    return piece.kind is PieceKind.PAWN and target_row == piece.team.promotion_row


class MoveExecutor:
    """Performs moves on the live board once :class:`MoveValidator` allows them.

    Every method either applies a complete move and returns its record, or
    returns ``None`` / raises before touching the board.
    """

    __slots__ = ("_board", "_validator")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._validator = MoveValidator(board)

    def attempt_move_to(
        self, piece_id: int, target: Square, move_number: int
    ) -> Move | None:
        """Move *piece_id* to *target* on *move_number* if legal.

        Tries an ordinary move first, then en passant (pawns) and castling
        (kings).  Promotion is a separate step; see :meth:`promote`.
        """
        piece = self._board.piece(piece_id)
        origin = piece.square

        if self._validator.can_move_to(piece, target):
            captured = self._board[target]
            flag = MoveFlag.NORMAL
            if piece.kind is PieceKind.PAWN and abs(target[0] - origin[0]) == 2:
                flag = MoveFlag.DOUBLE_PAWN
            self._board.place(piece_id, target)
            self._board.record_move(piece_id, move_number)
            return self._record(
                origin, target, move_number, flag, captured.kind if captured else None
            )

        if self._validator.can_en_passant(piece, target, move_number):
            victim = self._board.remove(make_square(origin[0], target[1]))
            self._board.place(piece_id, target)
            self._board.record_move(piece_id, move_number)
            return self._record(
                origin,
                target,
                move_number,
                MoveFlag.EN_PASSANT,
                victim.kind if victim else None,
            )

        flag = self._validator.castling_flag(piece, target)
        if flag is not None:
            rook_from, rook_to = MoveValidator.castling_rook_squares(piece.team, flag)
            rook = self._board[rook_from]
            assert rook is not None
            self._board.place(piece_id, target)
            self._board.place(rook.id, rook_to)
            self._board.record_move(piece_id, move_number)
            self._board.record_move(rook.id, move_number)
            return self._record(origin, target, move_number, flag, None)

        return None

    def promote(self, piece_id: int, kind: PieceKind, move_number: int) -> Piece:
        """Replace the pawn *piece_id* with a fresh piece of *kind*.

        Raises:
            ValueError: *kind* is not a promotion kind, or the piece is not a
                pawn standing on its farthest rank.
        """
        if kind not in PROMOTION_KINDS:
            raise ValueError(f"Cannot promote to {kind.name}")
        pawn = self._board.piece(piece_id)
        if not will_promote(pawn, pawn.square[0]):
            raise ValueError(
                f"{pawn} on {square_name(pawn.square)} is not eligible for promotion"
            )
        promoted = self._board.replace(pawn.square, kind)
        _LOGGER.debug(
            "Move %d: %s on %s promoted to %s",
            move_number,
            pawn,
            square_name(pawn.square),
            kind.name,
        )
        return promoted

    @staticmethod
    def _record(
        origin: Square,
        target: Square,
        move_number: int,
        flag: MoveFlag,
        captured: PieceKind | None,
    ) -> Move:
        move = Move(origin, target, move_number, flag, captured=captured)
        _LOGGER.debug("Move %d: %s (%s)", move_number, move, flag.name)
        return move
