"""MovePanel — scrollable list of numbered moves in SAN notation."""

from __future__ import annotations

from collections.abc import Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QLabel, QListWidget, QVBoxLayout, QWidget

from pawnbridge.core.enums import Side
from pawnbridge.core.move import PlayedMove
from pawnbridge.game.ledger import move_number

# Unicode figurine symbols: white = outline, black = filled
_FIGURINE: dict[Side, dict[str, str]] = {
    Side.WHITE: {"K": "♔", "Q": "♕", "R": "♖", "B": "♗", "N": "♘"},
    Side.BLACK: {"K": "♚", "Q": "♛", "R": "♜", "B": "♝", "N": "♞"},
}


def _figurine_san(san: str, side: Side) -> str:
    """Replace piece letters in *san* with Unicode figurine symbols for *side*."""
    table = _FIGURINE[side]

    # Replace leading piece letter (Nf3, Qxd5, Ke2…)
    if san and san[0] in table:
        san = table[san[0]] + san[1:]

    # Replace promotion target (e8=Q → e8=♕)
    if "=" in san:
        prefix, _, promo = san.partition("=")
        san = prefix + "=" + table.get(promo[0], promo[0]) + promo[1:]

    return san


class MovePanel(QWidget):
    """Displays the game's move history, one numbered line per full move."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._moves: list[PlayedMove] = []
        self._use_figurine_notation = False
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._header = QLabel("Moves")
        self._header.setFont(QFont("Helvetica Neue", 12, QFont.Weight.Bold))
        self._header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._header)

        self._list = QListWidget()
        self._list.setAlternatingRowColors(True)
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        layout.addWidget(self._list)

    def clear(self) -> None:
        self._moves.clear()
        self._list.clear()

    def set_use_figurine_notation(self, enabled: bool) -> None:
        """Toggle move text style between figurines and standard SAN letters."""
        if self._use_figurine_notation == enabled:
            return
        self._use_figurine_notation = enabled
        self._rebuild_list()

    def set_history(self, moves: Sequence[PlayedMove]) -> None:
        """Rebuild the entire move list."""
        self._moves = list(moves)
        self._rebuild_list()

    def add_move(self, move: PlayedMove) -> None:
        self._moves.append(move)
        self._rebuild_list()

    def lines(self) -> list[str]:
        return [self._list.item(i).text() for i in range(self._list.count())]

    def _format_san(self, move: PlayedMove) -> str:
        if self._use_figurine_notation:
            return _figurine_san(move.san, move.side)
        return move.san

    def _rebuild_list(self) -> None:
        # Numbering is derived from the list position every time
        self._list.clear()
        for ply, move in enumerate(self._moves, start=1):
            san = self._format_san(move)
            if ply % 2 == 1:
                self._list.addItem(f"{move_number(ply)}. {san}")
            else:
                last = self._list.item(self._list.count() - 1)
                last.setText(f"{last.text()} {san}")
        self._list.scrollToBottom()
