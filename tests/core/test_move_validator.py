"""Tests for MoveValidator — piece movement, king safety, castling, en passant."""

from chessrules.core.board import Board
from chessrules.core.enums import MoveFlag, Team
from chessrules.core.move_validator import MoveValidator
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1, A3, A8, B1, B5, C1, C3, D1, D2, D3, D5, D6, D7, D8,
    E1, E2, E3, E4, E5, E6, E7, E8, F1, G1, H1, H5,
)


def _validator(layout: dict[str, str]) -> tuple[Board, MoveValidator]:
    board = Board.from_codes(layout)
    return board, MoveValidator(board)


class TestPieceMovement:
    def test_knight_from_start(self, initial_board: Board) -> None:
        v = MoveValidator(initial_board)
        knight = initial_board[B1]
        assert knight is not None
        assert sorted(v.legal_targets(knight)) == sorted([A3, C3])

    def test_own_piece_blocks_target(self, initial_board: Board) -> None:
        v = MoveValidator(initial_board)
        knight = initial_board[B1]
        assert knight is not None
        assert not v.can_move_to(knight, D2)  # own pawn

    def test_slider_path_blocked(self, initial_board: Board) -> None:
        v = MoveValidator(initial_board)
        rook = initial_board[A1]
        assert rook is not None
        assert not v.can_move_to(rook, A3)
        assert v.legal_targets(rook) == []

    def test_cannot_stay_in_place(self, initial_board: Board) -> None:
        v = MoveValidator(initial_board)
        king = initial_board[E1]
        assert king is not None
        assert not v.can_move_to(king, E1)

    def test_out_of_bounds(self, initial_board: Board) -> None:
        v = MoveValidator(initial_board)
        knight = initial_board[B1]
        assert knight is not None
        assert not v.can_move_to(knight, (8, 2))

    def test_queen_lines(self) -> None:
        _, v = _validator({"e1": "wK", "e8": "bK", "d5": "wQ"})
        queen = v.board[D5]
        assert queen is not None
        assert v.can_move_to(queen, A8)  # diagonal
        assert v.can_move_to(queen, D1)  # file
        assert v.can_move_to(queen, H5)  # rank
        assert not v.can_move_to(queen, E3)  # knight jump

    def test_king_single_step(self) -> None:
        _, v = _validator({"e1": "wK", "e8": "bK"})
        king = v.board[E1]
        assert king is not None
        assert v.can_move_to(king, E2)
        assert not v.can_move_to(king, E3)


class TestPawnMovement:
    def test_single_and_double_step(self, initial_board: Board) -> None:
        v = MoveValidator(initial_board)
        pawn = initial_board[E2]
        assert pawn is not None
        assert v.can_move_to(pawn, E3)
        assert v.can_move_to(pawn, E4)
        assert not v.can_move_to(pawn, (3, 4))  # e5

    def test_double_step_only_first_move(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "e2": "wP"})
        pawn = board[E2]
        assert pawn is not None
        pawn = board.record_move(pawn.id, 1)
        assert v.can_move_to(pawn, E3)
        assert not v.can_move_to(pawn, E4)

    def test_double_step_blocked_in_between(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "e2": "wP", "e3": "bN"})
        pawn = board[E2]
        assert pawn is not None
        assert not v.can_move_to(pawn, E4)

    def test_forward_blocked_by_enemy(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "e4": "wP", "e5": "bP"})
        pawn = board[E4]
        assert pawn is not None
        assert not v.can_move_to(pawn, E5)

    def test_diagonal_needs_capture(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "e4": "wP", "d5": "bP"})
        pawn = board[E4]
        assert pawn is not None
        assert v.can_move_to(pawn, D5)
        assert not v.can_move_to(pawn, (3, 5))  # f5 is empty

    def test_no_backward_move(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "e4": "wP"})
        pawn = board[E4]
        assert pawn is not None
        assert not v.can_move_to(pawn, E3)

    def test_black_moves_down(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "e7": "bP"})
        pawn = board[E7]
        assert pawn is not None
        assert v.can_move_to(pawn, E6)
        assert v.can_move_to(pawn, E5)
        assert not v.can_move_to(pawn, E8)


class TestKingSafety:
    def test_rook_gives_check(self) -> None:
        _, v = _validator({"e1": "wK", "e8": "bR", "a8": "bK"})
        assert v.is_in_check(Team.WHITE)
        assert not v.is_in_check(Team.BLACK)

    def test_blocked_line_is_not_check(self) -> None:
        _, v = _validator({"e1": "wK", "e4": "wN", "e8": "bR", "a8": "bK"})
        assert not v.is_in_check(Team.WHITE)

    def test_pinned_piece_cannot_leave_line(self) -> None:
        board, v = _validator({"e1": "wK", "e2": "wB", "e8": "bR", "a8": "bK"})
        bishop = board[E2]
        assert bishop is not None
        assert not v.can_move_to(bishop, D3)
        assert v.can_move_to(bishop, D3, check_self_king_safety=False)

    def test_king_cannot_step_into_attack(self) -> None:
        board, v = _validator({"e1": "wK", "a2": "bR", "h8": "bK"})
        king = board[E1]
        assert king is not None
        assert not v.can_move_to(king, E2)
        assert v.can_move_to(king, D1)

    def test_king_cannot_capture_defended_piece(self) -> None:
        board, v = _validator({"e1": "wK", "e2": "bQ", "e8": "bR", "a8": "bK"})
        king = board[E1]
        assert king is not None
        assert not v.can_move_to(king, E2)

    def test_king_may_capture_undefended_piece(self) -> None:
        board, v = _validator({"e1": "wK", "e2": "bQ", "a8": "bK"})
        king = board[E1]
        assert king is not None
        assert v.can_move_to(king, E2)

    def test_is_in_check_at_hypothetical_square(self) -> None:
        _, v = _validator({"e1": "wK", "d8": "bR", "a8": "bK"})
        assert not v.is_in_check(Team.WHITE)
        assert v.is_in_check_at(Team.WHITE, D1)

    def test_queries_leave_board_untouched(self, initial_board: Board) -> None:
        snapshot = initial_board.copy()
        v = MoveValidator(initial_board)
        for piece in initial_board.pieces(Team.WHITE):
            v.legal_targets(piece, 1)
        v.is_in_check_at(Team.WHITE, E4)
        v.is_checkmate(Team.BLACK, 2)
        assert initial_board == snapshot


class TestMateAndStalemate:
    _BACK_RANK = {
        "g1": "wK", "f2": "wP", "g2": "wP", "h2": "wP",
        "e1": "bR", "a8": "bK",
    }

    def test_back_rank_mate(self) -> None:
        _, v = _validator(self._BACK_RANK)
        assert v.is_in_check(Team.WHITE)
        assert v.is_checkmate(Team.WHITE)
        assert not v.is_stalemate(Team.WHITE)

    def test_capture_of_checker_prevents_mate(self) -> None:
        _, v = _validator({**self._BACK_RANK, "a1": "wR"})
        assert v.is_in_check(Team.WHITE)
        assert not v.is_checkmate(Team.WHITE)

    def test_block_prevents_mate(self) -> None:
        _, v = _validator({**self._BACK_RANK, "d3": "wB"})
        # Bishop can interpose on f1.
        assert not v.is_checkmate(Team.WHITE)

    def test_stalemate(self) -> None:
        _, v = _validator({"h8": "bK", "f7": "wK", "g6": "wQ"})
        assert not v.is_in_check(Team.BLACK)
        assert v.is_stalemate(Team.BLACK)
        assert not v.is_checkmate(Team.BLACK)

    def test_starting_position_is_neither(self, initial_board: Board) -> None:
        v = MoveValidator(initial_board)
        for team in Team:
            assert not v.is_checkmate(team, 1)
            assert not v.is_stalemate(team, 1)
            assert v.has_legal_move(team)


class TestCastling:
    _LAYOUT = {"e1": "wK", "a1": "wR", "h1": "wR", "e8": "bK"}

    def _king(self, board: Board) -> Piece:
        king = board[E1]
        assert king is not None
        return king

    def test_both_sides_available(self) -> None:
        board, v = _validator(self._LAYOUT)
        king = self._king(board)
        assert v.castling_flag(king, G1) is MoveFlag.CASTLE_KINGSIDE
        assert v.castling_flag(king, C1) is MoveFlag.CASTLE_QUEENSIDE
        targets = v.legal_targets(king)
        assert G1 in targets and C1 in targets

    def test_not_a_castling_square(self) -> None:
        board, v = _validator(self._LAYOUT)
        assert v.castling_flag(self._king(board), H1) is None
        assert v.castling_flag(self._king(board), E2) is None

    def test_king_has_moved(self) -> None:
        board, v = _validator(self._LAYOUT)
        king = board.record_move(self._king(board).id, 3)
        assert v.castling_flag(king, G1) is None
        assert v.castling_flag(king, C1) is None

    def test_rook_has_moved(self) -> None:
        board, v = _validator(self._LAYOUT)
        rook = board[H1]
        assert rook is not None
        board.record_move(rook.id, 3)
        king = self._king(board)
        assert v.castling_flag(king, G1) is None
        assert v.castling_flag(king, C1) is MoveFlag.CASTLE_QUEENSIDE

    def test_missing_rook(self) -> None:
        board, v = _validator({"e1": "wK", "h1": "wR", "e8": "bK"})
        assert v.castling_flag(self._king(board), C1) is None

    def test_enemy_rook_in_corner(self) -> None:
        board, v = _validator({"e1": "wK", "h1": "bR", "e8": "bK"})
        assert v.castling_flag(self._king(board), G1) is None

    def test_path_blocked(self) -> None:
        board, v = _validator({**self._LAYOUT, "b1": "wN", "g1": "bB"})
        king = self._king(board)
        assert v.castling_flag(king, C1) is None
        assert v.castling_flag(king, G1) is None

    def test_not_out_of_check(self) -> None:
        board, v = _validator({**self._LAYOUT, "e5": "bR"})
        king = self._king(board)
        assert v.castling_flag(king, G1) is None
        assert v.castling_flag(king, C1) is None

    def test_not_through_attacked_square(self) -> None:
        board, v = _validator({**self._LAYOUT, "f8": "bR"})
        king = self._king(board)
        assert v.castling_flag(king, G1) is None
        assert v.castling_flag(king, C1) is MoveFlag.CASTLE_QUEENSIDE

    def test_not_into_attacked_square(self) -> None:
        board, v = _validator({**self._LAYOUT, "c8": "bR"})
        assert v.castling_flag(self._king(board), C1) is None

    def test_attacked_b_file_does_not_matter(self) -> None:
        board, v = _validator({**self._LAYOUT, "b8": "bR"})
        assert v.castling_flag(self._king(board), C1) is MoveFlag.CASTLE_QUEENSIDE

    def test_black_castles_on_rank_eight(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "h8": "bR"})
        king = board[E8]
        assert king is not None
        assert v.castling_flag(king, (0, 6)) is MoveFlag.CASTLE_KINGSIDE

    def test_rook_squares(self) -> None:
        assert MoveValidator.castling_rook_squares(
            Team.WHITE, MoveFlag.CASTLE_KINGSIDE
        ) == (H1, F1)
        assert MoveValidator.castling_rook_squares(
            Team.BLACK, MoveFlag.CASTLE_QUEENSIDE
        ) == (A8, D8)


class TestEnPassant:
    def _after_black_double_step(
        self, layout: dict[str, str], origin: tuple[int, int], target: tuple[int, int]
    ) -> tuple[Board, MoveValidator]:
        board, v = _validator(layout)
        victim = board[origin]
        assert victim is not None
        board.place(victim.id, target)
        board.record_move(victim.id, 4)
        return board, v

    def test_capture_right_after_double_step(self) -> None:
        board, v = self._after_black_double_step(
            {"e1": "wK", "e8": "bK", "e5": "wP", "d7": "bP"}, D7, D5
        )
        pawn = board[E5]
        assert pawn is not None
        assert v.can_en_passant(pawn, D6, 5)
        assert D6 in v.legal_targets(pawn, 5)

    def test_only_on_the_next_move(self) -> None:
        board, v = self._after_black_double_step(
            {"e1": "wK", "e8": "bK", "e5": "wP", "d7": "bP"}, D7, D5
        )
        pawn = board[E5]
        assert pawn is not None
        assert not v.can_en_passant(pawn, D6, 7)
        assert D6 not in v.legal_targets(pawn)

    def test_not_after_two_single_steps(self) -> None:
        board, v = _validator({"e1": "wK", "e8": "bK", "e5": "wP", "d6": "bP"})
        victim = board[D6]
        assert victim is not None
        board.record_move(victim.id, 2)
        board.place(victim.id, D5)
        board.record_move(victim.id, 4)
        pawn = board[E5]
        assert pawn is not None
        assert not v.can_en_passant(pawn, D6, 5)

    def test_wrong_rank(self) -> None:
        board, v = self._after_black_double_step(
            {"e1": "wK", "e8": "bK", "e4": "wP", "d7": "bP"}, D7, (3, 3)
        )
        pawn = board[E4]
        assert pawn is not None
        assert not v.can_en_passant(pawn, (3, 3), 5)

    def test_exposing_own_king_is_illegal(self) -> None:
        # Both pawns leave rank 5, opening it to the rook.
        board, v = self._after_black_double_step(
            {"a5": "wK", "b5": "wP", "c7": "bP", "h5": "bR", "e8": "bK"},
            (1, 2),
            (3, 2),
        )
        pawn = board[B5]
        assert pawn is not None
        assert not v.can_en_passant(pawn, (2, 2), 5)

    def test_only_pawns(self) -> None:
        board, v = self._after_black_double_step(
            {"e1": "wK", "e8": "bK", "e5": "wN", "d7": "bP"}, D7, D5
        )
        knight = board[E5]
        assert knight is not None
        assert not v.can_en_passant(knight, D6, 5)
