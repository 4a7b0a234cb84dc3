"""Game management layer — session, ledger, captured pieces, controller.

Quick start::

    from pawnbridge.game import GameController, GameSession

    ctrl = GameController(GameSession(), bridge, schedule=QTimer.singleShot)
    ctrl.events.on_status.append(print)
    ctrl.start()
    ctrl.on_drop("e2", "e4")
"""

from pawnbridge.game.captured import CapturedPieceTracker, CapturedSet
from pawnbridge.game.controller import GameController, GameEvents
from pawnbridge.game.interfaces import (
    BoardHandlers,
    BoardSurface,
    GamePhase,
    IEngineBridge,
    Scheduler,
)
from pawnbridge.game.ledger import MoveLedger, format_lines, move_number
from pawnbridge.game.session import GameSession
from pawnbridge.game.status import is_terminal, status_text

__all__ = [
    # Interfaces
    "BoardHandlers",
    "BoardSurface",
    "GamePhase",
    "IEngineBridge",
    "Scheduler",
    # Concrete
    "CapturedPieceTracker",
    "CapturedSet",
    "GameController",
    "GameEvents",
    "GameSession",
    "MoveLedger",
    # Helpers
    "format_lines",
    "is_terminal",
    "move_number",
    "status_text",
]
