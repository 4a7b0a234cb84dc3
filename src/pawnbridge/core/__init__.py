"""Core domain types shared by every layer — no Qt, no engine I/O."""

from pawnbridge.core.enums import PieceType, Side
from pawnbridge.core.move import MoveProposal, PlayedMove, is_square_name

__all__ = [
    "MoveProposal",
    "PieceType",
    "PlayedMove",
    "Side",
    "is_square_name",
]
