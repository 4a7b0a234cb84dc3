"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

import chess
from PyQt6.QtCore import QObject, QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from pawnbridge.core.enums import PieceType, Side
from pawnbridge.game.interfaces import BoardHandlers
from pawnbridge.ui.board.piece_item import PieceItem
from pawnbridge.ui.styles.theme import BoardTheme

_FILES = "abcdefgh"


def _file_rank(square: str) -> tuple[int, int]:
    return _FILES.index(square[0]), int(square[1]) - 1


def _square_name(file: int, rank: int) -> str:
    return f"{_FILES[file]}{rank + 1}"


def is_dark_square(square: str) -> bool:
    f, r = _file_rank(square)
    return (f + r) % 2 == 0


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, hints and piece items.

    The scene holds no game rules. It asks its :class:`BoardHandlers`
    whether a piece may be picked up, which squares to hint while hovering,
    and whether a drop is accepted; a rejected drop snaps the piece back.
    """

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._handlers: BoardHandlers | None = None
        self._board = chess.BaseBoard()
        self._flipped = False

        # Interaction state
        self._hover_sq: str | None = None
        self._dragging_item: PieceItem | None = None
        self._grab_offset = QPointF()

        # Visual layers
        self._square_items: dict[str, QGraphicsRectItem] = {}
        self._hint_items: list[QGraphicsRectItem] = []
        self._last_move_highlights: list[QGraphicsRectItem] = []
        self._piece_items: dict[str, PieceItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()
        self._sync_pieces()

    # ── Public API ───────────────────────────────────────────────────────

    def set_handlers(self, handlers: BoardHandlers | None) -> None:
        self._handlers = handlers

    def set_position(self, fen: str) -> None:
        """Show the piece placement of *fen* (full FEN or placement field)."""
        self._board = chess.BaseBoard(fen.split()[0])
        self._dragging_item = None
        self._clear_hints()
        self._sync_pieces()

    def position(self) -> str:
        """Piece placement field of the displayed position."""
        return self._board.board_fen()

    def reset_to_start(self) -> None:
        self.set_position(chess.STARTING_BOARD_FEN)
        self.highlight_last_move(None, None)

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._clear_hints()
        self._draw_board()
        self._sync_pieces()

    def is_flipped(self) -> bool:
        return self._flipped

    def highlight_last_move(self, from_sq: str | None, to_sq: str | None) -> None:
        """Highlight origin/destination of the last played move."""
        self._clear_items(self._last_move_highlights)
        if from_sq is None or to_sq is None:
            return
        for sq in (from_sq, to_sq):
            rect = self._make_highlight(sq, self._theme.last_move)
            rect.setZValue(0.5)
            self._last_move_highlights.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        font = QFont()
        font.setPixelSize(max(9, t // 8))

        for r in range(8):
            for f in range(8):
                sq = _square_name(f, r)
                vf, vr = self._visual_coords(f, r)
                dark = is_dark_square(sq)
                color = self._theme.dark_square if dark else self._theme.light_square
                rect = QGraphicsRectItem(vf * t, vr * t, t, t)
                rect.setBrush(QBrush(color))
                rect.setPen(QPen(Qt.PenStyle.NoPen))
                rect.setZValue(0)
                self.addItem(rect)
                self._square_items[sq] = rect

                coord_color = self._theme.coord_dark if dark else self._theme.coord_light
                # Rank numbers on the left edge, file letters on the bottom edge
                if vf == 0:
                    self._add_coord(str(r + 1), font, coord_color, vf * t + 2, vr * t + 1)
                if vr == 7:
                    self._add_coord(_FILES[f], font, coord_color, vf * t + t - 12, vr * t + t - 16)

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _add_coord(self, label: str, font: QFont, color: QColor, x: float, y: float) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current placement."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        t = self.TILE
        for index, piece in self._board.piece_map().items():
            sq = chess.square_name(index)
            side = Side.WHITE if piece.color == chess.WHITE else Side.BLACK
            fill, outline = (
                (self._theme.white_piece, self._theme.black_piece)
                if side == Side.WHITE
                else (self._theme.black_piece, self._theme.white_piece)
            )
            item = PieceItem(PieceType(piece.piece_type), side, sq, t, fill, outline)
            self.addItem(item)
            self._place(item, sq)
            self._piece_items[sq] = item

    def _place(self, item: PieceItem, square: str) -> None:
        vf, vr = self._visual_coords(*_file_rank(square))
        t = self.TILE
        item.setPos(QPointF(vf * t, vr * t) + item.offset())

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None and self._press_at(event.scenePos()):
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None:
            self._move_to(event.scenePos())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None and self._release_at(event.scenePos()):
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def _press_at(self, pos: QPointF) -> bool:
        """Start dragging the piece under *pos* if the handlers allow it."""
        sq = self._pos_to_square(pos)
        item = self._piece_items.get(sq) if sq is not None else None
        if item is None or self._handlers is None:
            return False
        if not self._handlers.can_pick_up(item.side):
            return False
        self._grab_offset = pos - item.pos()
        item.start_drag()
        self._dragging_item = item
        return True

    def _move_to(self, pos: QPointF) -> None:
        if self._dragging_item is not None:
            self._dragging_item.setPos(pos - self._grab_offset)
            return
        self._hover(self._pos_to_square(pos))

    def _release_at(self, pos: QPointF) -> bool:
        item = self._dragging_item
        if item is None:
            return False
        self._dragging_item = None
        self._clear_hints()
        self._hover_sq = None

        drop_sq = self._pos_to_square(pos)
        accepted = (
            drop_sq is not None
            and drop_sq != item.square
            and self._handlers is not None
            and self._handlers.on_drop(item.square, drop_sq)
        )
        if accepted:
            item.finish_drag()
        else:
            # Invalid drop: snap back
            item.cancel_drag()
        return True

    # ── Hover hints ──────────────────────────────────────────────────────

    def _hover(self, square: str | None) -> None:
        if square == self._hover_sq:
            return
        self._hover_sq = square
        self._clear_hints()
        if square is None or square not in self._piece_items or self._handlers is None:
            return
        targets = self._handlers.legal_targets(square)
        if not targets:
            return
        for sq in (square, *targets):
            self._hint_items.append(
                self._make_highlight(sq, self._theme.hint_for(is_dark_square(sq)))
            )

    def _clear_hints(self) -> None:
        self._clear_items(self._hint_items)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, file: int, rank: int) -> tuple[int, int]:
        """Convert board file/rank to visual column/row."""
        if self._flipped:
            return 7 - file, rank
        return file, 7 - rank

    def _pos_to_square(self, pos: QPointF) -> str | None:
        """Scene position → square name."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        if self._flipped:
            f, r = 7 - col, row
        else:
            f, r = col, 7 - row
        return _square_name(f, r)

    def _square_center(self, square: str) -> QPointF:
        vf, vr = self._visual_coords(*_file_rank(square))
        t = self.TILE
        return QPointF(vf * t + t / 2, vr * t + t / 2)

    def _make_highlight(self, sq: str, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vf, vr = self._visual_coords(*_file_rank(sq))
        rect = QGraphicsRectItem(vf * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
