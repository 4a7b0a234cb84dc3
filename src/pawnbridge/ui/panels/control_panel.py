"""ControlPanel — game action buttons."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QWidget


class ControlPanel(QWidget):
    """Buttons for game actions: reset, flip, undo."""

    reset_clicked = pyqtSignal()
    flip_clicked = pyqtSignal()
    undo_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        btn_font = QFont("Helvetica Neue", 10)

        self._btn_reset = self._make_button("Reset", btn_font)
        self._btn_reset.clicked.connect(self.reset_clicked)
        layout.addWidget(self._btn_reset)

        self._btn_flip = self._make_button("Flip", btn_font)
        self._btn_flip.clicked.connect(self.flip_clicked)
        layout.addWidget(self._btn_flip)

        self._btn_undo = self._make_button("Undo", btn_font)
        self._btn_undo.clicked.connect(self.undo_clicked)
        layout.addWidget(self._btn_undo)

    @staticmethod
    def _make_button(text: str, font: QFont) -> QPushButton:
        btn = QPushButton(text)
        btn.setFont(font)
        btn.setMinimumHeight(36)
        return btn

    def set_undo_enabled(self, enabled: bool) -> None:
        """Undo is only offered while waiting for the human."""
        self._btn_undo.setEnabled(enabled)
