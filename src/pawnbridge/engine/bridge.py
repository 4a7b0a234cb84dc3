"""EngineBridge — request/response protocol with a UCI engine process."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from pawnbridge.engine.protocol import (
    IS_READY,
    QUIT,
    STOP,
    UCI,
    EngineReply,
    EngineRequest,
    ReadyOk,
    parse_engine_line,
)
from pawnbridge.engine.transport import EngineTransport

_LOGGER = logging.getLogger(__name__)


class EngineBridge(QObject):
    """Translates position/depth requests into engine commands and back.

    Readiness is established once by the ``uci``/``isready`` handshake and
    never reset. Search results are delivered through :attr:`reply_received`
    on the transport's thread; :meth:`request_move` itself returns only
    whether the request was sent.

    Signals:
        ready(): Emitted once, when ``readyok`` is first seen.
        reply_received(EngineReply): A ``bestmove`` line for a live request.
        engine_failed(str): The transport reported a failure.
    """

    ready = pyqtSignal()
    reply_received = pyqtSignal(object)
    engine_failed = pyqtSignal(str)

    def __init__(self, transport: EngineTransport, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._transport = transport
        self._is_ready = False
        self._initialized = False
        self._searches_in_flight = 0
        self._replies_to_discard = 0
        transport.line_received.connect(self.handle_line)
        transport.failed.connect(self._on_transport_failed)

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def searches_in_flight(self) -> int:
        return self._searches_in_flight

    # ── Commands ─────────────────────────────────────────────────────────

    def initialize(self) -> None:
        """Start the engine and send the readiness handshake (idempotent)."""
        if self._initialized:
            return
        self._initialized = True
        self._transport.start()
        self._transport.write_line(UCI)
        self._transport.write_line(IS_READY)

    def request_move(self, fen: str, depth: int) -> bool:
        """Ask for the best move in *fen*; ``False`` if the engine isn't ready.

        Callers must not issue a second request before the first reply.
        """
        if not self._is_ready:
            _LOGGER.debug("Engine not ready; request for %s deferred", fen)
            return False
        for command in EngineRequest(fen, depth).commands():
            self._transport.write_line(command)
        self._searches_in_flight += 1
        return True

    def stop_search(self) -> None:
        """Ask the engine to answer now with the best move found so far."""
        if self._searches_in_flight:
            self._transport.write_line(STOP)

    def discard_in_flight(self) -> None:
        """Drop replies to every search sent so far when they arrive."""
        self._replies_to_discard = self._searches_in_flight

    def shutdown(self) -> None:
        if not self._initialized:
            return
        self._transport.write_line(QUIT)
        self._transport.close()
        self._initialized = False

    # ── Inbound ──────────────────────────────────────────────────────────

    def handle_line(self, line: str) -> None:
        """Decode one line of engine output and act on it."""
        message = parse_engine_line(line)
        if message is None:
            _LOGGER.debug("Ignoring engine output: %s", line)
            return

        if isinstance(message, ReadyOk):
            if not self._is_ready:
                self._is_ready = True
                _LOGGER.info("Engine ready")
                self.ready.emit()
            return

        self._on_reply(message)

    def _on_reply(self, reply: EngineReply) -> None:
        if self._searches_in_flight == 0:
            _LOGGER.warning("Unexpected engine reply with no search running: %s", reply.raw)
            return
        self._searches_in_flight -= 1
        if self._replies_to_discard:
            self._replies_to_discard -= 1
            _LOGGER.info("Discarding stale engine reply: %s", reply.raw)
            return
        self.reply_received.emit(reply)

    def _on_transport_failed(self, message: str) -> None:
        self.engine_failed.emit(message)
