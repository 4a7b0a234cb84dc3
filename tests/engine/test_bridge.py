"""Tests for EngineBridge and the line-splitting side of ProcessTransport."""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from PyQt6.QtTest import QSignalSpy

from pawnbridge.engine.bridge import EngineBridge
from pawnbridge.engine.protocol import EngineMove, ReplyKind
from pawnbridge.engine.transport import ProcessTransport

FEN = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"


class _StubSignal:
    def __init__(self) -> None:
        self._slots: list[Callable[..., object]] = []

    def connect(self, slot: Callable[..., object]) -> None:
        self._slots.append(slot)

    def emit(self, *args: object) -> None:
        for slot in list(self._slots):
            slot(*args)


class _StubTransport:
    def __init__(self) -> None:
        self.line_received = _StubSignal()
        self.failed = _StubSignal()
        self.written: list[str] = []
        self.started = 0
        self.closed = 0

    def start(self) -> None:
        self.started += 1

    def write_line(self, line: str) -> None:
        self.written.append(line)

    def close(self) -> None:
        self.closed += 1

    def reply(self, line: str) -> None:
        self.line_received.emit(line)


def _ready_bridge() -> tuple[EngineBridge, _StubTransport]:
    transport = _StubTransport()
    bridge = EngineBridge(transport)
    bridge.initialize()
    transport.reply("readyok")
    transport.written.clear()
    return bridge, transport


class TestHandshake:
    def test_initialize_sends_uci_then_isready(self) -> None:
        transport = _StubTransport()
        bridge = EngineBridge(transport)

        bridge.initialize()

        assert transport.started == 1
        assert transport.written == ["uci", "isready"]
        assert not bridge.is_ready

    def test_initialize_is_idempotent(self) -> None:
        transport = _StubTransport()
        bridge = EngineBridge(transport)
        bridge.initialize()
        bridge.initialize()
        assert transport.started == 1
        assert transport.written == ["uci", "isready"]

    def test_ready_only_after_readyok(self) -> None:
        transport = _StubTransport()
        bridge = EngineBridge(transport)
        ready = QSignalSpy(bridge.ready)
        bridge.initialize()

        transport.reply("id name Stockfish")
        transport.reply("uciok")
        assert not bridge.is_ready

        transport.reply("readyok")
        transport.reply("readyok")
        assert bridge.is_ready
        assert len(ready) == 1


class TestRequests:
    def test_request_rejected_before_ready(self) -> None:
        transport = _StubTransport()
        bridge = EngineBridge(transport)
        bridge.initialize()
        transport.written.clear()

        assert bridge.request_move(FEN, 10) is False
        assert transport.written == []
        assert bridge.searches_in_flight == 0

    def test_request_sends_position_and_depth(self) -> None:
        bridge, transport = _ready_bridge()

        assert bridge.request_move(FEN, 12) is True

        assert transport.written == [f"position fen {FEN}", "go depth 12"]
        assert bridge.searches_in_flight == 1

    def test_bestmove_is_delivered_asynchronously(self) -> None:
        bridge, transport = _ready_bridge()
        replies = QSignalSpy(bridge.reply_received)
        bridge.request_move(FEN, 10)

        transport.reply("info depth 1 score cp 20 pv e7e5")
        assert len(replies) == 0

        transport.reply("bestmove e7e5 ponder g1f3")
        assert len(replies) == 1
        reply = replies[0][0]
        assert reply.kind == ReplyKind.MOVE
        assert reply.best_move == EngineMove("e7", "e5")
        assert bridge.searches_in_flight == 0

    def test_no_move_reply_is_forwarded(self) -> None:
        bridge, transport = _ready_bridge()
        replies = QSignalSpy(bridge.reply_received)
        bridge.request_move(FEN, 10)

        transport.reply("bestmove (none)")

        assert len(replies) == 1
        assert replies[0][0].kind == ReplyKind.NO_MOVE

    def test_unsolicited_bestmove_is_dropped(self) -> None:
        bridge, transport = _ready_bridge()
        replies = QSignalSpy(bridge.reply_received)

        transport.reply("bestmove e2e4")

        assert len(replies) == 0

    def test_discarded_replies_are_not_forwarded(self) -> None:
        bridge, transport = _ready_bridge()
        replies = QSignalSpy(bridge.reply_received)
        bridge.request_move(FEN, 10)
        bridge.discard_in_flight()

        bridge.request_move(FEN, 10)
        transport.reply("bestmove e7e5")  # answer to the discarded search
        assert len(replies) == 0
        assert bridge.searches_in_flight == 1

        transport.reply("bestmove d7d5")
        assert len(replies) == 1
        assert replies[0][0].best_move == EngineMove("d7", "d5")

    def test_stop_only_sent_while_searching(self) -> None:
        bridge, transport = _ready_bridge()
        bridge.stop_search()
        assert transport.written == []

        bridge.request_move(FEN, 10)
        transport.written.clear()
        bridge.stop_search()
        assert transport.written == ["stop"]


class TestLifecycle:
    def test_shutdown_sends_quit_and_closes(self) -> None:
        bridge, transport = _ready_bridge()
        bridge.shutdown()
        assert transport.written == ["quit"]
        assert transport.closed == 1

    def test_shutdown_before_initialize_is_noop(self) -> None:
        transport = _StubTransport()
        EngineBridge(transport).shutdown()
        assert transport.written == []
        assert transport.closed == 0

    def test_transport_failure_is_reported(self) -> None:
        transport = _StubTransport()
        bridge = EngineBridge(transport)
        failures = QSignalSpy(bridge.engine_failed)

        transport.failed.emit("FailedToStart: stockfish")

        assert len(failures) == 1
        assert failures[0][0] == "FailedToStart: stockfish"


class TestProcessTransportFeed:
    def test_splits_lines_and_keeps_remainder(self) -> None:
        transport = ProcessTransport("stockfish")
        lines = QSignalSpy(transport.line_received)

        transport.feed(b"readyok\r\nbest")
        assert [lines[i][0] for i in range(len(lines))] == ["readyok"]

        transport.feed(b"move e2e4\n\n")
        assert [lines[i][0] for i in range(len(lines))] == ["readyok", "bestmove e2e4"]

    def test_multibyte_character_split_between_reads(self) -> None:
        transport = ProcessTransport("stockfish")
        lines = QSignalSpy(transport.line_received)
        encoded = "id author Håkan\n".encode()
        cut = encoded.index("å".encode()) + 1

        transport.feed(encoded[:cut])
        transport.feed(encoded[cut:])

        assert len(lines) == 1
        assert lines[0][0] == "id author Håkan"

    def test_not_running_before_start(self) -> None:
        transport = ProcessTransport("stockfish")
        assert not transport.is_running
        transport.write_line("uci")  # dropped with a warning
        transport.close()
        assert not transport.is_running


@pytest.mark.skipif(not os.path.exists("/bin/sh"), reason="needs a POSIX shell")
class TestProcessTransportFailures:
    def test_crash_is_reported_once(self, qapp) -> None:
        transport = ProcessTransport("/bin/sh", ["-c", "kill -9 $$"])
        failures = QSignalSpy(transport.failed)

        transport.start()
        assert transport._process is not None
        assert transport._process.waitForFinished(5000)

        assert len(failures) == 1
        assert failures[0][0].startswith("engine exited")
        transport.close()
        assert len(failures) == 1

    def test_killing_a_stubborn_engine_on_close_is_not_a_failure(self, qapp) -> None:
        transport = ProcessTransport("/bin/sh", ["-c", "trap '' TERM; sleep 30"])
        failures = QSignalSpy(transport.failed)

        transport.start()
        assert transport._process is not None
        assert transport._process.waitForStarted(5000)
        transport.close()

        assert len(failures) == 0
        assert not transport.is_running
