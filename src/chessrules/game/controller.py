"""GameController — the turn coordinator of a chess game.

Coordinates: GameState, MoveValidator, MoveExecutor.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from chessrules.core.board import Board
from chessrules.core.enums import GameResult, MoveFlag, PieceKind, Team
from chessrules.core.executor import MoveExecutor, will_promote
from chessrules.core.move import MoveRequest
from chessrules.core.move_validator import MoveValidator
from chessrules.core.notation import (
    AcceptDraw,
    Command,
    NotationError,
    Resign,
    parse_command,
)
from chessrules.core.piece import PROMOTION_KINDS
from chessrules.core.rules import Rules
from chessrules.core.types import Square
from chessrules.game.interfaces import GameEndReason, GamePhase, RejectReason
from chessrules.game.state import GameState, MoveRecord
from chessrules.settings import GameSettings

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
CheckCallback = Callable[[Team], None]
RejectedCallback = Callable[[RejectReason], None]
GameOverCallback = Callable[[GameResult, GameEndReason], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Sequences turns: validates actions, applies moves, detects game end.

    Every public action returns ``True`` when it changed the game and
    ``False`` when it was refused; a refusal leaves the state untouched and
    fires exactly one ``on_rejected`` event.
    """

    __slots__ = ("_state", "_settings", "events")

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._state = GameState()
        self._settings = settings if settings is not None else GameSettings()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def board(self) -> Board:
        return self._state.board

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(self, board: Board | None = None) -> None:
        """Start a game from the standard setup or from *board*."""
        self._state = GameState()
        self._state.setup(board)
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._begin_turn()

    # ── Player actions ───────────────────────────────────────────────────

    def handle_command(self, text: str) -> bool:
        """Parse and perform one line of player input for the side to move."""
        try:
            command = parse_command(text)
        except NotationError as exc:
            _LOGGER.debug("Unparseable command %r: %s", text, exc)
            return self._reject(RejectReason.MALFORMED_INPUT)
        return self.perform(command)

    def perform(self, command: Command) -> bool:
        if isinstance(command, Resign):
            return self.resign()
        if isinstance(command, AcceptDraw):
            return self.accept_draw()
        return self.submit_move(command)

    def submit_move(self, request: MoveRequest) -> bool:
        state = self._state
        refusal = self._phase_refusal()
        if refusal is not None:
            return self._reject(refusal)
        if state.opponent_offer_pending:
            return self._reject(RejectReason.DRAW_OFFER_PENDING)

        team = state.side_to_move
        piece = state.board[request.origin]
        if piece is None:
            return self._reject(RejectReason.NO_PIECE)
        if piece.team is not team:
            return self._reject(RejectReason.OPPONENT_PIECE)

        promotes = will_promote(piece, request.destination[0])
        if request.promotion is not None and (
            not promotes or request.promotion not in PROMOTION_KINDS
        ):
            return self._reject(RejectReason.PROMOTION_NOT_ALLOWED)

        executor = MoveExecutor(state.board)
        move = executor.attempt_move_to(
            piece.id, request.destination, state.current_move_number
        )
        if move is None:
            return self._reject(RejectReason.ILLEGAL_MOVE)

        promotion: PieceKind | None = None
        if promotes:
            promotion = request.promotion or PieceKind.QUEEN
            executor.promote(piece.id, promotion, state.current_move_number)
            move = replace(move, flag=MoveFlag.PROMOTION, promotion=promotion)

        record = MoveRecord(
            team=team,
            move=move,
            promotion=promotion,
            offered_draw=request.offer_draw,
        )
        state.complete_half_move(record)
        _LOGGER.debug("%s played %s", team, request)

        self._emit_move(record)
        self._begin_turn()
        return True

    def resign(self, team: Team | None = None) -> bool:
        state = self._state
        refusal = self._phase_refusal()
        if refusal is not None:
            return self._reject(refusal)
        if team is not None and team is not state.side_to_move:
            return self._reject(RejectReason.NOT_YOUR_TURN)
        state.resign(state.side_to_move)
        self._emit_game_over()
        return True

    def accept_draw(self, team: Team | None = None) -> bool:
        state = self._state
        refusal = self._phase_refusal()
        if refusal is not None:
            return self._reject(refusal)
        if team is not None and team is not state.side_to_move:
            return self._reject(RejectReason.NOT_YOUR_TURN)
        if not state.opponent_offer_pending:
            return self._reject(RejectReason.NO_DRAW_OFFER)
        state.set_draw(GameEndReason.DRAW_AGREED)
        self._emit_game_over()
        return True

    # ── Queries ──────────────────────────────────────────────────────────

    def is_in_check(self, team: Team | None = None) -> bool:
        team = self._state.side_to_move if team is None else team
        return MoveValidator(self._state.board).is_in_check(team)

    def legal_targets(self, piece_id: int) -> list[Square]:
        """Destinations the piece may move to on the current half-move."""
        board = self._state.board
        return MoveValidator(board).legal_targets(
            board.piece(piece_id), self._state.current_move_number
        )

    # ── Internal helpers ─────────────────────────────────────────────────

    def _begin_turn(self) -> None:
        """Terminal and check detection on entry to a side's turn."""
        state = self._state
        team = state.side_to_move
        result = Rules.game_result(
            state.board,
            team,
            state.current_move_number,
            stalemate_is_draw=self._settings.stalemate_is_draw,
        )
        if result is not GameResult.IN_PROGRESS:
            reason = (
                GameEndReason.STALEMATE
                if result is GameResult.DRAW
                else GameEndReason.CHECKMATE
            )
            state.finish(result, reason)
            self._emit_game_over()
            return

        if Rules.is_in_check(state.board, team):
            for cb in self.events.on_check:
                cb(team)

    def _phase_refusal(self) -> RejectReason | None:
        if self._state.phase == GamePhase.NOT_STARTED:
            return RejectReason.NOT_STARTED
        if self._state.is_game_over:
            return RejectReason.GAME_OVER
        return None

    def _reject(self, reason: RejectReason) -> bool:
        _LOGGER.debug(
            "Move %d: rejected (%s)", self._state.current_move_number, reason.name
        )
        for cb in self.events.on_rejected:
            cb(reason)
        return False

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self) -> None:
        state = self._state
        _LOGGER.info("Game over: %s (%s)", state.result.name, state.end_reason.name)
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(state.result, state.end_reason)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
