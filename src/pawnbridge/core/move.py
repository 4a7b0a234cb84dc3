"""Move value objects (UCI-style squares, e.g. ``"e2"``)."""

from __future__ import annotations

from dataclasses import dataclass

from pawnbridge.core.enums import PieceType, Side

_FILES = "abcdefgh"
_RANKS = "12345678"


def is_square_name(text: str) -> bool:
    """Return True for a two-character algebraic square like ``"e4"``."""
    return len(text) == 2 and text[0] in _FILES and text[1] in _RANKS


@dataclass(frozen=True, slots=True)
class MoveProposal:
    """A move someone would like to play; legality is not implied."""

    from_sq: str
    to_sq: str
    promotion: PieceType | None = None

    def __str__(self) -> str:
        return self.uci

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        base = f"{self.from_sq}{self.to_sq}"
        if self.promotion is not None:
            base += self.promotion.letter
        return base


@dataclass(frozen=True, slots=True)
class PlayedMove:
    """A move accepted by the rules collaborator.

    Only the rules collaborator creates these; ``san`` and ``captured`` are
    derived at the moment the move is applied.
    """

    from_sq: str
    to_sq: str
    side: Side
    san: str
    promotion: PieceType | None = None
    captured: PieceType | None = None

    def __str__(self) -> str:
        return self.san

    @property
    def uci(self) -> str:
        base = f"{self.from_sq}{self.to_sq}"
        if self.promotion is not None:
            base += self.promotion.letter
        return base

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
