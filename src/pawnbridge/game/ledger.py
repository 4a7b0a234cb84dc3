"""MoveLedger — the record of played half-moves and its display numbering."""

from __future__ import annotations

from collections.abc import Iterable

from pawnbridge.core.move import PlayedMove


def move_number(ply_count: int) -> int:
    """Display move number of the *ply_count*-th half-move (1-based)."""
    return (ply_count + 1) // 2


def format_lines(moves: Iterable[PlayedMove]) -> list[str]:
    """Pair half-moves into numbered lines: ``["1. e4 e5", "2. Nf3"]``."""
    lines: list[str] = []
    for ply, move in enumerate(moves, start=1):
        if ply % 2 == 1:
            lines.append(f"{move_number(ply)}. {move.san}")
        else:
            lines[-1] = f"{lines[-1]} {move.san}"
    return lines


class MoveLedger:
    """Append-only list of :class:`PlayedMove` with truncation for undo.

    Must always hold exactly as many entries as the rules collaborator's
    history; :class:`~pawnbridge.game.session.GameSession` is the only
    place that mutates both.
    """

    __slots__ = ("_moves",)

    def __init__(self) -> None:
        self._moves: list[PlayedMove] = []

    def __len__(self) -> int:
        return len(self._moves)

    def length(self) -> int:
        return len(self._moves)

    def append(self, move: PlayedMove) -> int:
        """Record *move* and return its display move number."""
        self._moves.append(move)
        return move_number(len(self._moves))

    def truncate_last(self, n: int) -> bool:
        """Remove the last *n* entries; no-op returning False if too few."""
        if n < 0:
            raise ValueError(f"Cannot truncate a negative number of moves: {n}")
        if n > len(self._moves):
            return False
        if n:
            del self._moves[-n:]
        return True

    def clear(self) -> None:
        self._moves.clear()

    def entries(self) -> tuple[PlayedMove, ...]:
        return tuple(self._moves)

    def last(self) -> PlayedMove | None:
        return self._moves[-1] if self._moves else None

    def display_lines(self) -> list[str]:
        """Numbered move list, rebuilt from the entries on every call."""
        return format_lines(self._moves)
