"""Game management layer — session state, turn coordinator, collaborators.

Quick start::

    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.handle_command("e2 e4")
"""

from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import (
    GameEndReason,
    GamePhase,
    IMoveSource,
    IPresenter,
    RejectReason,
)
from chessrules.game.loop import run_game
from chessrules.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IMoveSource",
    "IPresenter",
    "RejectReason",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
    "run_game",
]
