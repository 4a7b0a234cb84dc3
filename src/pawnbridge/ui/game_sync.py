"""UI/game state synchronisation helpers for MainWindow."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from pawnbridge.core.move import PlayedMove
from pawnbridge.game.controller import GameController
from pawnbridge.game.interfaces import BoardSurface, GamePhase
from pawnbridge.ui.panels.captured_panel import CapturedPanel
from pawnbridge.ui.panels.control_panel import ControlPanel
from pawnbridge.ui.panels.move_panel import MovePanel

TCallback = TypeVar("TCallback", bound=Callable[..., None])


class GameSync:
    """Applies controller events to UI widgets."""

    __slots__ = (
        "_controller",
        "_board",
        "_move_panel",
        "_captured_panel",
        "_control_panel",
        "_set_status",
        "_set_fen",
        "_set_thinking",
        "_show_notice",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        board: BoardSurface,
        move_panel: MovePanel,
        captured_panel: CapturedPanel,
        control_panel: ControlPanel,
        set_status: Callable[[str], None],
        set_fen: Callable[[str], None],
        set_thinking: Callable[[bool], None],
        show_notice: Callable[[str], None],
    ) -> None:
        self._controller = controller
        self._board = board
        self._move_panel = move_panel
        self._captured_panel = captured_panel
        self._control_panel = control_panel
        self._set_status = set_status
        self._set_fen = set_fen
        self._set_thinking = set_thinking
        self._show_notice = show_notice

    # ── Subscription ─────────────────────────────────────────────────────

    def connect(self) -> None:
        """Subscribe to controller events (idempotent)."""
        events = self._controller.events
        _replace_callback(events.on_move, self.on_move)
        _replace_callback(events.on_history_changed, self.on_history_changed)
        _replace_callback(events.on_reset, self.on_reset)
        _replace_callback(events.on_status, self.on_status)
        _replace_callback(events.on_phase_changed, self.on_phase_changed)
        _replace_callback(events.on_notice, self.on_notice)

    def disconnect(self) -> None:
        events = self._controller.events
        _remove_callback(events.on_move, self.on_move)
        _remove_callback(events.on_history_changed, self.on_history_changed)
        _remove_callback(events.on_reset, self.on_reset)
        _remove_callback(events.on_status, self.on_status)
        _remove_callback(events.on_phase_changed, self.on_phase_changed)
        _remove_callback(events.on_notice, self.on_notice)

    # ── Event handlers ───────────────────────────────────────────────────

    def on_move(self, move: PlayedMove) -> None:
        self._board.set_position(self._controller.session.fen)
        self._board.highlight_last_move(move.from_sq, move.to_sq)
        self._move_panel.add_move(move)
        self._sync_captured_and_fen()

    def on_history_changed(self) -> None:
        """Full resync after moves were taken back."""
        session = self._controller.session
        self._board.set_position(session.fen)
        last = session.ledger.last()
        if last is None:
            self._board.highlight_last_move(None, None)
        else:
            self._board.highlight_last_move(last.from_sq, last.to_sq)
        self._move_panel.set_history(session.ledger.entries())
        self._sync_captured_and_fen()

    def on_reset(self) -> None:
        self._board.reset_to_start()
        self._move_panel.clear()
        self._sync_captured_and_fen()

    def on_status(self, text: str) -> None:
        self._set_status(text)

    def on_phase_changed(self, phase: GamePhase) -> None:
        self._set_thinking(phase == GamePhase.AWAITING_ENGINE)
        self._control_panel.set_undo_enabled(phase == GamePhase.IDLE)

    def on_notice(self, text: str) -> None:
        self._show_notice(text)

    def sync_all(self) -> None:
        """Bring every widget in line with the current session."""
        self.on_history_changed()
        self._set_status(self._controller.status)
        self.on_phase_changed(self._controller.phase)

    def _sync_captured_and_fen(self) -> None:
        session = self._controller.session
        self._captured_panel.set_captured(session.captured)
        self._set_fen(session.fen)


def _replace_callback(callbacks: list[TCallback], callback: TCallback) -> None:
    callbacks[:] = [cb for cb in callbacks if cb != callback]
    callbacks.append(callback)


def _remove_callback(callbacks: list[TCallback], callback: TCallback) -> None:
    callbacks[:] = [cb for cb in callbacks if cb != callback]
