"""MainWindow — board, command entry and status line."""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessrules.core.enums import GameResult, Team
from chessrules.core.move import MoveRequest
from chessrules.game.controller import GameController
from chessrules.game.interfaces import GameEndReason, RejectReason
from chessrules.game.state import GameState, MoveRecord
from chessrules.settings import GameSettings
from chessrules.ui.board_view import BoardView

_LOGGER = logging.getLogger(__name__)

ILLEGAL_MOVE_MESSAGE = "Illegal move, try again"


def game_over_message(result: GameResult, reason: GameEndReason) -> str:
    """Status text for a finished game."""
    if result is GameResult.DRAW:
        return "Stalemate: draw" if reason is GameEndReason.STALEMATE else "Draw"
    winner = Team.WHITE if result is GameResult.WHITE_WINS else Team.BLACK
    if reason is GameEndReason.CHECKMATE:
        return f"Checkmate. {winner} wins"
    return f"{winner} wins"


class MainWindow(QMainWindow):
    """Main application window.

    Moves can be played by clicking on the board or typed into the command
    line using the console grammar (``e2 e4``, ``e7 e8 N draw?``,
    ``resign``, ``draw``).
    """

    def __init__(self, settings: GameSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("chessrules")
        self.setMinimumSize(480, 560)

        self._controller = GameController(settings)
        self._setup_ui()
        self._connect_signals()
        self._connect_game_events()

        self._board_view.board_scene.set_show_legal_moves(
            self._controller.settings.show_legal_moves
        )
        self.new_game()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._board_view = BoardView()
        root.addWidget(self._board_view, stretch=1)

        self._status = QLabel()
        root.addWidget(self._status)

        row = QHBoxLayout()
        self._command = QLineEdit()
        self._command.setPlaceholderText("e2 e4")
        row.addWidget(self._command, stretch=1)

        self._btn_resign = QPushButton("Resign")
        self._btn_draw = QPushButton("Accept draw")
        self._btn_new = QPushButton("New game")
        for btn in (self._btn_resign, self._btn_draw, self._btn_new):
            row.addWidget(btn)
        root.addLayout(row)

    def _connect_signals(self) -> None:
        self._board_view.move_requested.connect(self._on_board_move)
        self._command.returnPressed.connect(self._on_command_entered)
        self._btn_resign.clicked.connect(lambda: self._controller.resign())
        self._btn_draw.clicked.connect(lambda: self._controller.accept_draw())
        self._btn_new.clicked.connect(self.new_game)

    def _connect_game_events(self) -> None:
        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_check.append(self._on_check)
        events.on_rejected.append(self._on_rejected)
        events.on_game_over.append(self._on_game_over)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def status_text(self) -> str:
        return self._status.text()

    def new_game(self) -> None:
        self._controller.new_game()
        self._refresh()
        if not self._controller.state.is_game_over:
            self._show_turn()

    # ── Handlers ─────────────────────────────────────────────────────────

    def _on_board_move(self, request: MoveRequest) -> None:
        self._controller.submit_move(request)

    def _on_command_entered(self) -> None:
        text = self._command.text()
        self._command.clear()
        self._controller.handle_command(text)

    def _on_move(self, record: MoveRecord, state: GameState) -> None:
        _LOGGER.debug("Move %d shown: %s", record.move.move_number, record.move)
        self._refresh()
        self._show_turn()

    def _on_check(self, team: Team) -> None:
        self._status.setText(f"Check. {team} to move")

    def _on_rejected(self, reason: RejectReason) -> None:
        self._status.setText(ILLEGAL_MOVE_MESSAGE)

    def _on_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        self._refresh()
        self._status.setText(game_over_message(result, reason))

    # ── Internal helpers ─────────────────────────────────────────────────

    def _refresh(self) -> None:
        state = self._controller.state
        scene = self._board_view.board_scene
        scene.set_board(state.board, state.side_to_move, state.current_move_number)
        scene.set_interactive(not state.is_game_over)
        self._btn_draw.setEnabled(state.opponent_offer_pending)

    def _show_turn(self) -> None:
        state = self._controller.state
        if state.is_game_over:
            return
        team = state.side_to_move
        if self._controller.is_in_check(team):
            self._status.setText(f"Check. {team} to move")
        elif state.opponent_offer_pending:
            self._status.setText(f"{team.opposite} offers a draw")
        else:
            self._status.setText(f"{team} to move")
