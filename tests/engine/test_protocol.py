"""Tests for the UCI message codec."""

from __future__ import annotations

import pytest

from pawnbridge.core.enums import PieceType
from pawnbridge.engine.protocol import (
    READY_OK,
    EngineMove,
    EngineRequest,
    ReplyKind,
    decode_move,
    parse_engine_line,
)


class TestEngineRequest:
    def test_commands(self) -> None:
        request = EngineRequest("8/8/8/8/8/8/8/K6k w - - 0 1", 10)
        assert request.commands() == (
            "position fen 8/8/8/8/8/8/8/K6k w - - 0 1",
            "go depth 10",
        )


class TestDecodeMove:
    def test_plain_move(self) -> None:
        assert decode_move("e2e4") == EngineMove("e2", "e4")

    def test_promotion(self) -> None:
        assert decode_move("e7e8n") == EngineMove("e7", "e8", PieceType.KNIGHT)

    @pytest.mark.parametrize("payload", ["", "e2", "e2e", "e2e4qq", "i2e4", "e2e9", "e7e8k", "e7e8x"])
    def test_rejects_bad_payloads(self, payload: str) -> None:
        assert decode_move(payload) is None


class TestParseEngineLine:
    def test_readyok(self) -> None:
        assert parse_engine_line("readyok") is READY_OK

    def test_bestmove_without_promotion_leaves_it_unset(self) -> None:
        reply = parse_engine_line("bestmove e7e8")
        assert reply is not None and reply is not READY_OK
        assert reply.kind == ReplyKind.MOVE
        assert reply.best_move == EngineMove("e7", "e8")
        assert reply.best_move.promotion is None

    def test_bestmove_with_ponder(self) -> None:
        reply = parse_engine_line("bestmove g1f3 ponder g8f6")
        assert reply is not None and reply is not READY_OK
        assert reply.has_move
        assert reply.best_move == EngineMove("g1", "f3")
        assert reply.raw == "bestmove g1f3 ponder g8f6"

    def test_no_move_sentinel(self) -> None:
        reply = parse_engine_line("bestmove (none)")
        assert reply is not None and reply is not READY_OK
        assert reply.kind == ReplyKind.NO_MOVE
        assert not reply.has_move

    @pytest.mark.parametrize("line", ["bestmove", "bestmove xyz", "bestmove e2"])
    def test_malformed(self, line: str) -> None:
        reply = parse_engine_line(line)
        assert reply is not None and reply is not READY_OK
        assert reply.kind == ReplyKind.MALFORMED
        assert reply.best_move is None

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "   ",
            "id name Stockfish 16",
            "uciok",
            "info depth 10 score cp 31 pv e2e4",
            "option name Hash type spin default 16 min 1 max 33554432",
            "readyok please",
            "Stockfish 16 by the Stockfish developers",
        ],
    )
    def test_everything_else_is_ignored(self, line: str) -> None:
        assert parse_engine_line(line) is None
