"""CapturedPanel — pieces taken by each side, with material advantage."""

from __future__ import annotations

from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

from pawnbridge.core.enums import PieceType, Side
from pawnbridge.game.captured import CapturedPieceTracker

# Captured pieces belong to the opponent: White's haul is drawn in filled
# (black) glyphs, Black's haul in outline (white) glyphs.
_GLYPHS: dict[Side, dict[PieceType, str]] = {
    Side.WHITE: {
        PieceType.PAWN: "♟",
        PieceType.KNIGHT: "♞",
        PieceType.BISHOP: "♝",
        PieceType.ROOK: "♜",
        PieceType.QUEEN: "♛",
        PieceType.KING: "♚",
    },
    Side.BLACK: {
        PieceType.PAWN: "♙",
        PieceType.KNIGHT: "♘",
        PieceType.BISHOP: "♗",
        PieceType.ROOK: "♖",
        PieceType.QUEEN: "♕",
        PieceType.KING: "♔",
    },
}

_MARKERS: dict[Side, str] = {Side.WHITE: "⚪", Side.BLACK: "⚫"}


def captured_line(side: Side, pieces: tuple[PieceType, ...], advantage: int = 0) -> str:
    """``"⚪ ♟ ♞ +2"`` — marker, glyphs in capture order, positive lead."""
    parts = [_MARKERS[side], *(_GLYPHS[side][p] for p in pieces)]
    if advantage > 0:
        parts.append(f"+{advantage}")
    return " ".join(parts)


class CapturedPanel(QWidget):
    """Two label rows, one per capturing side."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        self._labels: dict[Side, QLabel] = {}
        for side in (Side.WHITE, Side.BLACK):
            label = QLabel(_MARKERS[side])
            label.setObjectName("capturedLabel")
            layout.addWidget(label)
            self._labels[side] = label

    def set_captured(self, tracker: CapturedPieceTracker) -> None:
        for side, label in self._labels.items():
            label.setText(
                captured_line(side, tracker.captured_by(side), tracker.material_advantage(side))
            )

    def clear(self) -> None:
        for side, label in self._labels.items():
            label.setText(_MARKERS[side])

    def text_for(self, side: Side) -> str:
        return self._labels[side].text()
