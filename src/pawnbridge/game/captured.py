"""CapturedPieceTracker — pieces taken by each side, derived from the ledger."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pawnbridge.core.enums import PieceType, Side
from pawnbridge.core.move import PlayedMove

CapturedSet = Mapping[Side, tuple[PieceType, ...]]


class CapturedPieceTracker:
    """Buckets captured piece kinds by the side that captured them.

    Forward moves may use :meth:`apply_incremental`; anything that removes
    history must call :meth:`recompute_from`. Captures are keyed by side,
    not by ledger position, so there is no "pop n" inverse.
    """

    __slots__ = ("_captured",)

    def __init__(self) -> None:
        self._captured: dict[Side, list[PieceType]] = {Side.WHITE: [], Side.BLACK: []}

    def recompute_from(self, moves: Iterable[PlayedMove]) -> None:
        self.clear()
        for move in moves:
            self.apply_incremental(move)

    def apply_incremental(self, move: PlayedMove) -> None:
        if move.captured is not None:
            self._captured[move.side].append(move.captured)

    def clear(self) -> None:
        for pieces in self._captured.values():
            pieces.clear()

    def captured_by(self, side: Side) -> tuple[PieceType, ...]:
        return tuple(self._captured[side])

    def snapshot(self) -> CapturedSet:
        return {side: tuple(pieces) for side, pieces in self._captured.items()}

    def material_advantage(self, side: Side) -> int:
        """Captured material of *side* minus that of the opponent."""
        mine = sum(p.value_points for p in self._captured[side])
        theirs = sum(p.value_points for p in self._captured[side.opposite])
        return mine - theirs
