"""PieceItem — draggable chess piece drawn as a Unicode glyph."""

from __future__ import annotations

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QCursor, QFont, QPen
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsSimpleTextItem

from pawnbridge.core.enums import PieceType, Side

# Filled glyphs for both sides; the brush carries the colour.
_GLYPHS: dict[PieceType, str] = {
    PieceType.PAWN: "♟",
    PieceType.KNIGHT: "♞",
    PieceType.BISHOP: "♝",
    PieceType.ROOK: "♜",
    PieceType.QUEEN: "♛",
    PieceType.KING: "♚",
}


def glyph_for(kind: PieceType) -> str:
    return _GLYPHS[kind]


class PieceItem(QGraphicsSimpleTextItem):
    """A single chess piece on the board.

    Stores its logical *square* (``"e2"``) and supports drag & drop.
    """

    _FONT_RATIO = 0.72

    def __init__(
        self,
        kind: PieceType,
        side: Side,
        square: str,
        tile_size: int,
        fill: QColor,
        outline: QColor,
    ) -> None:
        super().__init__(glyph_for(kind))
        self.kind = kind
        self.side = side
        self.square = square
        self._tile_size = tile_size
        self._drag_origin: QPointF | None = None

        self.setBrush(QBrush(fill))
        self.setPen(QPen(outline, 1.0))
        self.setCacheMode(QGraphicsItem.CacheMode.NoCache)
        self._update_size(tile_size)

        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, False)
        self.setCursor(QCursor(Qt.CursorShape.PointingHandCursor))
        self.setZValue(1)

    def set_tile_size(self, size: int) -> None:
        self._update_size(size)

    def offset(self) -> QPointF:
        """Top-left offset that centres the glyph inside its tile."""
        bounds = self.boundingRect()
        return QPointF(
            (self._tile_size - bounds.width()) / 2.0,
            (self._tile_size - bounds.height()) / 2.0,
        )

    @property
    def is_dragging(self) -> bool:
        return self._drag_origin is not None

    def start_drag(self) -> None:
        """Called at the beginning of a drag gesture."""
        self._drag_origin = self.pos()
        self.setZValue(10)  # bring to front
        self.setCursor(QCursor(Qt.CursorShape.ClosedHandCursor))
        self.setOpacity(0.85)

    def cancel_drag(self) -> None:
        """Snap back to original position."""
        if self._drag_origin is not None:
            self.setPos(self._drag_origin)
        self._finish_drag()

    def finish_drag(self) -> None:
        """Cleanup after a successful drop."""
        self._finish_drag()

    def _finish_drag(self) -> None:
        self._drag_origin = None
        self.setZValue(1)
        self.setCursor(QCursor(Qt.CursorShape.PointingHandCursor))
        self.setOpacity(1.0)

    def _update_size(self, size: int) -> None:
        self._tile_size = size
        font = QFont()
        font.setPixelSize(max(int(size * self._FONT_RATIO), 1))
        self.setFont(font)
