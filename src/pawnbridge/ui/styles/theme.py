"""Visual theme constants and QSS styles for PawnBridge."""

from __future__ import annotations

import random
from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    hint_light: QColor  # legal target on a light square
    hint_dark: QColor  # legal target on a dark square
    last_move: QColor  # last move origin and destination
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares
    white_piece: QColor
    black_piece: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            hint_light=QColor("#a9a9a9"),
            hint_dark=QColor("#696969"),
            last_move=QColor(155, 199, 0, 105),  # green
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(20, 20, 20),
        )

    def hint_for(self, is_dark: bool) -> QColor:
        return self.hint_dark if is_dark else self.hint_light


def soothing_background(rng: random.Random | None = None) -> QColor:
    """Muted random colour, ``hsl(hue, 30%, 30%)``."""
    hue = (rng or random).randrange(360)
    return QColor.fromHslF(hue / 360.0, 0.3, 0.3)


def window_style(background: QColor) -> str:
    """Per-window QSS overriding the main window background."""
    return f"QMainWindow {{ background: {background.name()}; }}"


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-family: "Helvetica Neue", sans-serif;
}

QLabel#capturedLabel {
    font-size: 22px;
}

QListWidget {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-family: "Consolas", monospace;
    font-size: 13px;
}

QListWidget::item:selected {
    background: #264f78;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}
QPushButton:disabled {
    color: #666;
    background: #2b2b2b;
}

QStatusBar {
    color: #e0e0e0;
}
QStatusBar QLabel#fenLabel {
    color: #9a9a9a;
    font-family: "Consolas", monospace;
}
"""
