"""Rules collaborator interface.

The game layer never implements chess rules itself; it talks to whatever
satisfies :class:`IRules`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pawnbridge.core.enums import PieceType, Side
    from pawnbridge.core.move import PlayedMove


class IRules(Protocol):
    """Authoritative legality and board-state engine."""

    def apply_move(
        self, from_sq: str, to_sq: str, promotion: PieceType | None = None
    ) -> PlayedMove | None:
        """Play the move if legal and return its record, else ``None``."""
        ...

    def undo(self) -> PlayedMove | None:
        """Take back the last move; ``None`` when history is empty."""
        ...

    def reset(self) -> None: ...

    def legal_moves(self, square: str) -> list[str]:
        """Destination squares reachable from *square* by the side to move."""
        ...

    def turn(self) -> Side: ...

    def in_check(self) -> bool: ...

    def in_checkmate(self) -> bool: ...

    def in_draw(self) -> bool: ...

    def history(self) -> tuple[PlayedMove, ...]: ...

    def position(self) -> str:
        """FEN of the current position."""
        ...
