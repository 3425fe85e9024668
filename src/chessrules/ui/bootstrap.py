"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys

from chessrules.settings import GameSettings, configure_logging

_LOGGER = logging.getLogger(__name__)


def run_application(
    argv: list[str] | None = None, settings: GameSettings | None = None
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from chessrules.ui.main_window import MainWindow

    settings = settings if settings is not None else GameSettings()
    configure_logging(settings.log_level)

    app = QApplication(sys.argv if argv is None else argv)
    app.setApplicationName("chessrules")
    app.setStyle("Fusion")

    window = MainWindow(settings)
    window.show()
    _LOGGER.debug("Main window shown")

    return app.exec()
