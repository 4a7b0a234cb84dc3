"""Abstract interfaces for the game layer.

The controller depends on these protocols, not on Qt widgets or on the
concrete engine bridge, so it can be driven entirely from tests.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pawnbridge.core.enums import Side


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of a game against the engine."""

    IDLE = auto()  # waiting for the human (or for the engine to become ready)
    AWAITING_ENGINE = auto()  # one search request is in flight
    GAME_OVER = auto()  # terminal position; only reset is accepted


Scheduler = Callable[[int, Callable[[], None]], object]
"""``schedule(delay_ms, callback)`` — e.g. ``QTimer.singleShot``."""


# ── Collaborators ────────────────────────────────────────────────────────────


class IEngineBridge(Protocol):
    """The subset of :class:`~pawnbridge.engine.EngineBridge` the game uses."""

    @property
    def is_ready(self) -> bool: ...

    def request_move(self, fen: str, depth: int) -> bool: ...

    def stop_search(self) -> None: ...

    def discard_in_flight(self) -> None: ...


class BoardHandlers(Protocol):
    """Capability interface the board widget calls back into."""

    def can_pick_up(self, side: Side) -> bool:
        """May a piece of *side* be dragged right now?"""
        ...

    def on_drop(self, source: str, target: str) -> bool:
        """Try a move; ``False`` tells the board to snap the piece back."""
        ...

    def legal_targets(self, square: str) -> list[str]:
        """Squares to hint while hovering *square*."""
        ...


class BoardSurface(Protocol):
    """What the game side drives on the board widget."""

    def set_position(self, fen: str) -> None: ...

    def reset_to_start(self) -> None: ...

    def flip(self) -> None: ...

    def fit_to_view(self) -> None: ...

    def highlight_last_move(self, from_sq: str | None, to_sq: str | None) -> None: ...
