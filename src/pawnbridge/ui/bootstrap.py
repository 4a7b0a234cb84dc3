"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from pawnbridge.config import AppSettings, load_settings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a stderr handler on the root logger."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        _LOGGER.warning("Unknown log level %r, using INFO", level)
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=_LOG_FORMAT)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from pawnbridge.ui.styles.theme import APP_STYLE

    app.setApplicationName("PawnBridge")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from pawnbridge.ui.main_window import MainWindow

    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)
    _LOGGER.info("Using engine %s at depth %d", settings.engine_path, settings.search_depth)

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()

    return app.exec()
