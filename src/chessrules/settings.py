"""User-configurable settings and logging setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # Rules
    stalemate_is_draw: bool = False  # stalemate otherwise leaves the game running

    # Display
    unicode_pieces: bool = False
    show_legal_moves: bool = True

    # Diagnostics
    log_level: str = "WARNING"


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Install a root handler once; later calls only adjust the level."""
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = numeric
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=_LOG_FORMAT)
    logging.getLogger("chessrules").setLevel(level)
