"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Side(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    @property
    def display_name(self) -> str:
        """Capitalised name used in status text ("White", "Black")."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, text: str) -> Side:
        """Parse ``"white"``/``"w"``/``"black"``/``"b"`` (case-insensitive)."""
        value = text.strip().lower()
        if value in ("white", "w"):
            return cls.WHITE
        if value in ("black", "b"):
            return cls.BLACK
        raise ValueError(f"Unknown side: {text!r}")

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types; values match the ``chess`` package constants."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Lower-case letter used in UCI promotion suffixes."""
        return "pnbrqk"[self.value - 1]

    @property
    def value_points(self) -> int:
        """Conventional material value (king counts as 0)."""
        return _POINTS[self]

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        idx = "pnbrqk".find(letter.lower()) if len(letter) == 1 else -1
        if idx < 0:
            raise ValueError(f"Unknown piece letter: {letter!r}")
        return cls(idx + 1)


_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}
