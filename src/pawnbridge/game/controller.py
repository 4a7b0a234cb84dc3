"""GameController — one human against one engine, as an explicit state machine.

Phases (see :class:`~pawnbridge.game.interfaces.GamePhase`)::

    IDLE ──human move──▶ (delay) ──request──▶ AWAITING_ENGINE
      ▲                                            │
      └────────────── engine reply ────────────────┘
    terminal position ─▶ GAME_OVER ──reset──▶ IDLE

Every timer callback carries the request token that was current when it
was scheduled; reset, undo and engine replies advance the token so that
late callbacks fall through.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from pawnbridge.config import AppSettings
from pawnbridge.core.enums import PieceType, Side
from pawnbridge.core.move import MoveProposal, PlayedMove
from pawnbridge.engine.protocol import EngineReply
from pawnbridge.game.interfaces import GamePhase, IEngineBridge, Scheduler
from pawnbridge.game.session import GameSession
from pawnbridge.game.status import is_terminal, status_text

_LOGGER = logging.getLogger(__name__)

DEFAULT_PROMOTION = PieceType.QUEEN

ENGINE_UNAVAILABLE = "Engine unavailable"
ENGINE_NO_RESPONSE = "Engine did not respond"
ENGINE_ILLEGAL_MOVE = "Engine proposed an illegal move"

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[PlayedMove], None]
StatusCallback = Callable[[str], None]
PhaseCallback = Callable[[GamePhase], None]
NoticeCallback = Callable[[str], None]
Callback = Callable[[], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_history_changed: list[Callback] = field(default_factory=list)
    on_reset: list[Callback] = field(default_factory=list)
    on_status: list[StatusCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_notice: list[NoticeCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Board handlers, engine reply handling, reset and undo on one session.

    All methods must be called from one thread (the Qt main thread in the
    application); nothing here is locked.
    """

    __slots__ = (
        "_session",
        "_engine",
        "_settings",
        "_schedule",
        "_phase",
        "_token",
        "events",
        "__weakref__",
    )

    def __init__(
        self,
        session: GameSession,
        engine: IEngineBridge,
        *,
        settings: AppSettings | None = None,
        schedule: Scheduler,
    ) -> None:
        self._session = session
        self._engine = engine
        self._settings = settings if settings is not None else AppSettings()
        self._schedule = schedule
        self._phase = GamePhase.IDLE
        self._token = 0
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def human_side(self) -> Side:
        return self._settings.human_side

    @property
    def engine_side(self) -> Side:
        return self._settings.human_side.opposite

    @property
    def status(self) -> str:
        return status_text(self._session.rules)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Publish the opening status; let the engine move if it has White."""
        self._emit_status()
        self._schedule_engine_if_due()

    def reset(self) -> None:
        """Back to the starting position from any phase."""
        if self._phase == GamePhase.AWAITING_ENGINE:
            self._engine.stop_search()
            self._engine.discard_in_flight()
        self._token += 1
        self._session.reset()
        _LOGGER.info("Game reset")
        self._emit_reset()
        self._emit_status()
        self._set_phase(GamePhase.IDLE)
        self._schedule_engine_if_due()

    def undo(self) -> bool:
        """Take back the last engine reply and the human move before it."""
        if self._phase != GamePhase.IDLE:
            _LOGGER.info("Undo rejected in phase %s", self._phase.name)
            return False
        if not self._session.undo(2):
            return False
        self._token += 1
        self._emit_history_changed()
        self._emit_status()
        self._schedule_engine_if_due()
        return True

    # ── BoardHandlers impl ───────────────────────────────────────────────

    def can_pick_up(self, side: Side) -> bool:
        if self._phase != GamePhase.IDLE:
            return False
        rules = self._session.rules
        if is_terminal(rules):
            return False
        return side == rules.turn() == self.human_side

    def legal_targets(self, square: str) -> list[str]:
        if self._phase == GamePhase.GAME_OVER:
            return []
        return self._session.rules.legal_moves(square)

    def on_drop(self, source: str, target: str) -> bool:
        if source == target:
            return False
        if self._phase != GamePhase.IDLE:
            return False
        if self._session.rules.turn() != self.human_side:
            return False

        played = self._session.apply(MoveProposal(source, target, DEFAULT_PROMOTION))
        if played is None:
            return False

        _LOGGER.debug("Human played %s", played.san)
        self._after_move(played)
        return True

    # ── Engine side ──────────────────────────────────────────────────────

    def on_engine_reply(self, reply: EngineReply) -> None:
        if self._phase != GamePhase.AWAITING_ENGINE:
            _LOGGER.warning("Ignoring engine reply in phase %s: %s", self._phase.name, reply.raw)
            return
        self._token += 1

        if reply.has_move:
            assert reply.best_move is not None
            best = reply.best_move
            promotion = best.promotion if best.promotion is not None else DEFAULT_PROMOTION
            played = self._session.apply(MoveProposal(best.from_sq, best.to_sq, promotion))
            if played is None:
                _LOGGER.error("Engine move rejected by the rules: %s", reply.raw)
                self._set_phase(GamePhase.IDLE)
                self._emit_notice(ENGINE_ILLEGAL_MOVE)
                return
            _LOGGER.debug("Engine played %s", played.san)
            self._after_move(played)
            return

        terminal = is_terminal(self._session.rules)
        if not terminal:
            _LOGGER.warning(
                "Engine reported no move (%s) but the position is not terminal: %s",
                reply.raw or reply.kind.name,
                self._session.fen,
            )
        self._emit_status()
        self._set_phase(GamePhase.GAME_OVER if terminal else GamePhase.IDLE)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_move(self, played: PlayedMove) -> None:
        self._emit_move(played)
        self._emit_status()
        if is_terminal(self._session.rules):
            _LOGGER.info("Game over: %s", self.status)
            self._set_phase(GamePhase.GAME_OVER)
            return
        self._set_phase(GamePhase.IDLE)
        self._schedule_engine_if_due()

    def _engine_to_move(self) -> bool:
        rules = self._session.rules
        return rules.turn() == self.engine_side and not is_terminal(rules)

    def _schedule_engine_if_due(self) -> None:
        if self._phase != GamePhase.IDLE or not self._engine_to_move():
            return
        self._token += 1
        token = self._token
        self._schedule(
            self._settings.engine_request_delay_ms,
            lambda: self._try_request(token, 1),
        )

    def _try_request(self, token: int, attempt: int) -> None:
        if token != self._token or self._phase != GamePhase.IDLE:
            return
        if not self._engine_to_move():
            return

        if self._engine.is_ready and self._engine.request_move(
            self._session.fen, self._settings.search_depth
        ):
            self._set_phase(GamePhase.AWAITING_ENGINE)
            self._arm_watchdog(token)
            return

        if attempt >= self._settings.ready_max_attempts:
            _LOGGER.error("Engine not ready after %d attempts", attempt)
            self._emit_notice(ENGINE_UNAVAILABLE)
            return
        self._schedule(
            self._settings.ready_retry_ms,
            lambda: self._try_request(token, attempt + 1),
        )

    def _arm_watchdog(self, token: int) -> None:
        timeout = self._settings.engine_reply_timeout_ms
        if timeout <= 0:
            return
        self._schedule(timeout, lambda: self._on_watchdog(token, stopped=False))

    def _on_watchdog(self, token: int, *, stopped: bool) -> None:
        if token != self._token or self._phase != GamePhase.AWAITING_ENGINE:
            return
        if not stopped:
            _LOGGER.warning("No engine reply, asking it to stop searching")
            self._engine.stop_search()
            self._schedule(
                self._settings.engine_reply_timeout_ms,
                lambda: self._on_watchdog(token, stopped=True),
            )
            return
        _LOGGER.error("Engine ignored stop; giving up on the pending search")
        self._engine.discard_in_flight()
        self._token += 1
        self._set_phase(GamePhase.IDLE)
        self._emit_notice(ENGINE_NO_RESPONSE)

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, move: PlayedMove) -> None:
        for cb in self.events.on_move:
            cb(move)

    def _emit_history_changed(self) -> None:
        for cb in self.events.on_history_changed:
            cb()

    def _emit_reset(self) -> None:
        for cb in self.events.on_reset:
            cb()

    def _emit_status(self) -> None:
        text = self.status
        for cb in self.events.on_status:
            cb(text)

    def _emit_notice(self, text: str) -> None:
        for cb in self.events.on_notice:
            cb(text)
