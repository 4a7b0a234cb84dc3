"""Minimal UCI subset: outbound commands and inbound message decoding.

Only two inbound shapes matter:

* ``readyok`` — the engine finished initialising (:data:`READY_OK`).
* ``bestmove <from><to>[promo] [ponder ...]`` / ``bestmove (none)`` —
  the result of a search (:class:`EngineReply`).

Every other line (``id``, ``option``, ``uciok``, ``info``, anything newer
engines may print) decodes to ``None`` and is meant to be ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Final

from pawnbridge.core.enums import PieceType
from pawnbridge.core.move import is_square_name

# ── Outbound commands ────────────────────────────────────────────────────────

UCI: Final = "uci"
IS_READY: Final = "isready"
STOP: Final = "stop"
QUIT: Final = "quit"

NO_MOVE_TOKEN: Final = "(none)"
_PROMOTION_LETTERS: Final = "nbrq"


@dataclass(frozen=True, slots=True)
class EngineRequest:
    """A single search request: position plus fixed depth."""

    fen: str
    depth: int

    def commands(self) -> tuple[str, str]:
        return (f"position fen {self.fen}", f"go depth {self.depth}")


# ── Inbound messages ─────────────────────────────────────────────────────────


class ReadyOk:
    """Marker for the ``readyok`` handshake reply."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "READY_OK"


READY_OK: Final = ReadyOk()


class ReplyKind(IntEnum):
    """How a ``bestmove`` line was interpreted."""

    MOVE = auto()
    NO_MOVE = auto()  # engine reported "(none)"
    MALFORMED = auto()  # missing or undecodable payload


@dataclass(frozen=True, slots=True)
class EngineMove:
    """Coordinates decoded from a ``bestmove`` payload.

    ``promotion`` is ``None`` whenever the engine omitted the letter; choosing
    a default is the caller's business.
    """

    from_sq: str
    to_sq: str
    promotion: PieceType | None = None


@dataclass(frozen=True, slots=True)
class EngineReply:
    kind: ReplyKind
    best_move: EngineMove | None = None
    raw: str = ""

    @property
    def has_move(self) -> bool:
        return self.kind == ReplyKind.MOVE and self.best_move is not None


EngineMessage = ReadyOk | EngineReply


def decode_move(payload: str) -> EngineMove | None:
    """Decode ``e2e4`` / ``e7e8q`` into an :class:`EngineMove`."""
    if len(payload) not in (4, 5):
        return None
    from_sq, to_sq = payload[:2], payload[2:4]
    if not (is_square_name(from_sq) and is_square_name(to_sq)):
        return None
    promotion: PieceType | None = None
    if len(payload) == 5:
        letter = payload[4].lower()
        if letter not in _PROMOTION_LETTERS:
            return None
        promotion = PieceType.from_letter(letter)
    return EngineMove(from_sq, to_sq, promotion)


def parse_engine_line(line: str) -> EngineMessage | None:
    """Classify one line of engine output by its shape."""
    tokens = line.split()
    if not tokens:
        return None

    head = tokens[0]
    if head == "readyok" and len(tokens) == 1:
        return READY_OK
    if head != "bestmove":
        return None

    raw = line.strip()
    if len(tokens) < 2:
        return EngineReply(ReplyKind.MALFORMED, raw=raw)
    if tokens[1] == NO_MOVE_TOKEN:
        return EngineReply(ReplyKind.NO_MOVE, raw=raw)

    move = decode_move(tokens[1])
    if move is None:
        return EngineReply(ReplyKind.MALFORMED, raw=raw)
    return EngineReply(ReplyKind.MOVE, best_move=move, raw=raw)
