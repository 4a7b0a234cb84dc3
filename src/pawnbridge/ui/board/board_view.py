"""BoardView — QGraphicsView wrapper for the board scene."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter, QResizeEvent
from PyQt6.QtWidgets import QGraphicsView, QSizePolicy, QWidget

from pawnbridge.ui.board.board_scene import BoardScene


class BoardView(QGraphicsView):
    """Displays the board scene and keeps it scaled to the widget.

    Also the board surface the game side drives: ``set_position``,
    ``reset_to_start``, ``flip`` and ``fit_to_view``.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        self._scene = BoardScene()
        super().__init__(self._scene, parent)

        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)

    @property
    def board_scene(self) -> BoardScene:
        return self._scene

    # ── BoardSurface impl ────────────────────────────────────────────────

    def set_position(self, fen: str) -> None:
        self._scene.set_position(fen)

    def reset_to_start(self) -> None:
        self._scene.reset_to_start()

    def flip(self) -> None:
        self._scene.set_flipped(not self._scene.is_flipped())

    def fit_to_view(self) -> None:
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)

    def highlight_last_move(self, from_sq: str | None, to_sq: str | None) -> None:
        self._scene.highlight_last_move(from_sq, to_sq)

    def resizeEvent(self, event: QResizeEvent | None) -> None:
        super().resizeEvent(event)
        self.fit_to_view()
