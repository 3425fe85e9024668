"""Turn loop wiring a controller to its input and presentation collaborators."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import GameResult
from chessrules.game.controller import GameController
from chessrules.game.interfaces import GameEndReason, IMoveSource, IPresenter

_BOARD_DECIDED = (GameEndReason.CHECKMATE, GameEndReason.STALEMATE)


def run_game(
    controller: GameController,
    source: IMoveSource,
    presenter: IPresenter,
    board: Board | None = None,
) -> GameResult:
    """Start a new game on *controller* and play it to the end.

    The board is shown once per half-move; a refused command re-prompts the
    same side without redrawing.
    """
    controller.events.on_rejected.append(presenter.show_rejection)
    try:
        controller.new_game(board)
        state = controller.state
        while True:
            if state.is_game_over:
                if state.end_reason in _BOARD_DECIDED:
                    presenter.show_board(state.board, state.side_to_move)
                break

            team = state.side_to_move
            presenter.show_board(state.board, team)
            if controller.is_in_check(team):
                presenter.show_check(team)

            ply = state.ply_count
            while not state.is_game_over and state.ply_count == ply:
                controller.handle_command(source.next_command(team))

        presenter.show_game_over(state.result, state.end_reason)
        return state.result
    finally:
        controller.events.on_rejected.remove(presenter.show_rejection)
