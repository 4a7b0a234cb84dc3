"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from pawnbridge.config import AppSettings
from pawnbridge.core.enums import Side
from pawnbridge.engine.bridge import EngineBridge
from pawnbridge.engine.transport import EngineTransport, ProcessTransport
from pawnbridge.game.controller import ENGINE_UNAVAILABLE, GameController
from pawnbridge.game.interfaces import Scheduler
from pawnbridge.game.session import GameSession
from pawnbridge.ui.board.board_view import BoardView
from pawnbridge.ui.game_sync import GameSync
from pawnbridge.ui.panels.captured_panel import CapturedPanel
from pawnbridge.ui.panels.control_panel import ControlPanel
from pawnbridge.ui.panels.move_panel import MovePanel
from pawnbridge.ui.styles.theme import soothing_background, window_style

_LOGGER = logging.getLogger(__name__)

_INITIAL_FIT_DELAY_MS = 100


class MainWindow(QMainWindow):
    """Main application window: the board, the move list and the controls.

    *transport* and *schedule* default to a real engine process and
    ``QTimer.singleShot``; tests pass stand-ins.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: EngineTransport | None = None,
        schedule: Scheduler | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("PawnBridge")
        self.setMinimumSize(760, 560)
        self.resize(1000, 700)

        self._settings = settings if settings is not None else AppSettings()
        self._schedule: Scheduler = schedule if schedule is not None else QTimer.singleShot
        if transport is None:
            transport = ProcessTransport(
                self._settings.engine_path, self._settings.engine_args, self
            )
        self._engine = EngineBridge(transport, self)
        self._session = GameSession()
        self._controller = GameController(
            self._session,
            self._engine,
            settings=self._settings,
            schedule=self._schedule,
        )

        self._setup_ui()
        self._setup_menu()
        self._sync = GameSync(
            controller=self._controller,
            board=self._board_view,
            move_panel=self._move_panel,
            captured_panel=self._captured_panel,
            control_panel=self._control_panel,
            set_status=self._set_status,
            set_fen=self._fen_label.setText,
            set_thinking=self._thinking_label.setVisible,
            show_notice=self._show_notice,
        )
        self._connect_signals()
        self._sync.connect()
        self._sync.sync_all()

        self._engine.initialize()
        self._controller.start()
        self._schedule(_INITIAL_FIT_DELAY_MS, self._board_view.fit_to_view)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def engine(self) -> EngineBridge:
        return self._engine

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        if self._settings.random_theme:
            self.setStyleSheet(window_style(soothing_background()))

        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        # Board (left)
        self._board_view = BoardView()
        self._board_view.board_scene.set_handlers(self._controller)
        if self._settings.human_side == Side.BLACK:
            self._board_view.flip()
        root.addWidget(self._board_view, stretch=3)

        # Right panel
        right = QVBoxLayout()
        right.setSpacing(6)

        self._captured_panel = CapturedPanel()
        right.addWidget(self._captured_panel)

        self._move_panel = MovePanel()
        self._move_panel.set_use_figurine_notation(self._settings.use_figurine_notation)
        right.addWidget(self._move_panel, stretch=1)

        self._control_panel = ControlPanel()
        right.addWidget(self._control_panel)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(280)
        root.addWidget(right_widget)

        # Status bar
        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel()
        self._status.addWidget(self._status_label, 1)
        self._thinking_label = QLabel("Engine thinking…")
        self._thinking_label.setVisible(False)
        self._status.addPermanentWidget(self._thinking_label)
        self._fen_label = QLabel()
        self._fen_label.setObjectName("fenLabel")
        self._status.addPermanentWidget(self._fen_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        self._menu_game = menu_bar.addMenu("&Game")
        assert self._menu_game is not None

        self._act_reset = QAction("Reset", self)
        self._act_reset.setShortcut("Ctrl+N")
        self._act_reset.triggered.connect(self._on_reset)
        self._menu_game.addAction(self._act_reset)

        self._act_undo = QAction("Undo", self)
        self._act_undo.setShortcut("Ctrl+Z")
        self._act_undo.triggered.connect(self._on_undo)
        self._menu_game.addAction(self._act_undo)

        self._act_flip = QAction("Flip board", self)
        self._act_flip.setShortcut("F")
        self._act_flip.triggered.connect(self._on_flip)
        self._menu_game.addAction(self._act_flip)

        self._menu_game.addSeparator()

        self._act_quit = QAction("Quit", self)
        self._act_quit.setShortcut("Ctrl+Q")
        self._act_quit.triggered.connect(self.close)
        self._menu_game.addAction(self._act_quit)

    # ── Signal wiring ────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._control_panel.reset_clicked.connect(self._on_reset)
        self._control_panel.flip_clicked.connect(self._on_flip)
        self._control_panel.undo_clicked.connect(self._on_undo)
        self._engine.reply_received.connect(self._controller.on_engine_reply)
        self._engine.engine_failed.connect(self._on_engine_failed)

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_reset(self) -> None:
        self._controller.reset()

    def _on_undo(self) -> None:
        self._controller.undo()

    def _on_flip(self) -> None:
        self._board_view.flip()

    def _on_engine_failed(self, message: str) -> None:
        _LOGGER.error("Engine failure: %s", message)
        self._show_notice(f"{ENGINE_UNAVAILABLE}: {message}")

    def _set_status(self, text: str) -> None:
        self._status.clearMessage()
        self._status_label.setText(text)

    def _show_notice(self, text: str) -> None:
        # No timeout: cleared by the next status update.
        self._status.showMessage(text)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._sync.disconnect()
        self._engine.shutdown()
        super().closeEvent(event)
