"""Engine package: UCI message codec, process transport and Qt bridge."""

from pawnbridge.engine.bridge import EngineBridge
from pawnbridge.engine.protocol import (
    EngineMove,
    EngineReply,
    EngineRequest,
    ReplyKind,
    parse_engine_line,
)
from pawnbridge.engine.transport import EngineTransport, ProcessTransport

__all__ = [
    "EngineBridge",
    "EngineMove",
    "EngineReply",
    "EngineRequest",
    "EngineTransport",
    "ProcessTransport",
    "ReplyKind",
    "parse_engine_line",
]
