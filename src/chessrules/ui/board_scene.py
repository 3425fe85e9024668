"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chessrules.core.board import Board
from chessrules.core.enums import PieceKind, Team
from chessrules.core.move import MoveRequest
from chessrules.core.move_validator import MoveValidator
from chessrules.core.types import ALL_SQUARES, Square, make_square
from chessrules.ui.theme import BoardTheme

# Solid glyphs for both sides; the brush colour tells the teams apart.
_GLYPHS: dict[PieceKind, str] = {
    PieceKind.PAWN: "♟",
    PieceKind.KNIGHT: "♞",
    PieceKind.BISHOP: "♝",
    PieceKind.ROOK: "♜",
    PieceKind.QUEEN: "♛",
    PieceKind.KING: "♚",
}


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, and piece glyphs.

    Signals:
        move_requested(MoveRequest): Emitted when the user clicks a piece of
            the side to move and then one of its legal destinations.
    """

    move_requested = pyqtSignal(object)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._board: Board | None = None
        self._team_to_move = Team.WHITE
        self._move_number = 1

        # Interaction state
        self._selected_sq: Square | None = None
        self._legal_targets: list[Square] = []
        self._interactive = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._legal_dot_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Square, QGraphicsSimpleTextItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_board(self, board: Board, team_to_move: Team, move_number: int) -> None:
        """Update the displayed board (full redraw of pieces)."""
        self._board = board
        self._team_to_move = team_to_move
        self._move_number = move_number
        self._clear_selection()
        self._sync_pieces()
        self.highlight_check()

    def set_interactive(self, interactive: bool) -> None:
        """Enable / disable piece interaction."""
        self._interactive = interactive
        if not interactive:
            self._clear_selection()

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide legal-move dot highlights."""
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._legal_dot_items)

    def highlight_check(self) -> None:
        """Highlight the king of the side to move if it is in check."""
        self._clear_items(self._highlight_items)
        if self._board is None:
            return
        if MoveValidator(self._board).is_in_check(self._team_to_move):
            king_sq = self._board.king(self._team_to_move).square
            rect = self._make_highlight(king_sq, self._theme.highlight_check)
            rect.setZValue(0.6)
            self._highlight_items.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw the 64 squares and coordinates."""
        t = self.TILE
        font = QFont()
        font.setPointSize(max(9, t // 8))

        for row, col in ALL_SQUARES:
            is_dark = (row + col) % 2 == 1
            color = self._theme.dark_square if is_dark else self._theme.light_square
            rect = QGraphicsRectItem(col * t, row * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[(row, col)] = rect

            coord_color = self._theme.coord_dark if is_dark else self._theme.coord_light
            x, y = col * t, row * t
            # Rank numbers (left edge)
            if col == 0:
                self._add_coord(str(8 - row), font, coord_color, x + 2, y + 1)
            # File letters (bottom edge)
            if row == 7:
                letter = chr(ord("a") + col)
                self._add_coord(letter, font, coord_color, x + t - 12, y + t - 16)

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _add_coord(
        self, label: str, font: QFont, color: QColor, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._board is None:
            return

        t = self.TILE
        font = QFont()
        font.setPixelSize(int(t * 0.75))
        for sq in ALL_SQUARES:
            piece = self._board[sq]
            if piece is None:
                continue
            item = QGraphicsSimpleTextItem(_GLYPHS[piece.kind])
            item.setFont(font)
            if piece.team is Team.WHITE:
                item.setBrush(QBrush(self._theme.white_piece))
                item.setPen(QPen(self._theme.black_piece, 1.5))
            else:
                item.setBrush(QBrush(self._theme.black_piece))
            bounds = item.boundingRect()
            row, col = sq
            item.setPos(
                col * t + (t - bounds.width()) / 2, row * t + (t - bounds.height()) / 2
            )
            item.setZValue(1)
            self.addItem(item)
            self._piece_items[sq] = item

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._board is None or event is None:
            return super().mousePressEvent(event)

        sq = self._pos_to_square(event.scenePos())
        if sq is None:
            self._clear_selection()
            return super().mousePressEvent(event)
        self.click_square(sq)
        super().mousePressEvent(event)

    def click_square(self, sq: Square) -> None:
        """Select a piece, or complete a move to a highlighted target."""
        if self._board is None:
            return

        if self._selected_sq is not None and sq in self._legal_targets:
            request = MoveRequest(self._selected_sq, sq)
            self._clear_selection()
            self.move_requested.emit(request)
            return

        piece = self._board[sq]
        if piece is not None and piece.team is self._team_to_move:
            self._select_square(sq)
        else:
            self._clear_selection()

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, sq: Square) -> None:
        self._clear_selection()
        if self._board is None:
            return
        piece = self._board[sq]
        if piece is None:
            return
        self._selected_sq = sq

        rect = self._make_highlight(sq, self._theme.highlight_from)
        self._highlight_items.append(rect)

        self._legal_targets = MoveValidator(self._board).legal_targets(
            piece, self._move_number
        )
        if self._show_legal_moves:
            for target in self._legal_targets:
                dot = self._make_highlight(target, self._theme.highlight_to)
                self._legal_dot_items.append(dot)

    def _clear_selection(self) -> None:
        self._selected_sq = None
        self._legal_targets = []
        self._clear_items(self._highlight_items)
        self._clear_items(self._legal_dot_items)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        """Scene position → board square."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        return make_square(row, col)

    def _make_highlight(self, sq: Square, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        row, col = sq
        rect = QGraphicsRectItem(col * t, row * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
