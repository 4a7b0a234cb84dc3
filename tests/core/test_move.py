"""Tests for core enums and move value objects."""

from __future__ import annotations

import pytest

from pawnbridge.core.enums import PieceType, Side
from pawnbridge.core.move import MoveProposal, PlayedMove, is_square_name


class TestSide:
    def test_opposite(self) -> None:
        assert Side.WHITE.opposite == Side.BLACK
        assert Side.BLACK.opposite == Side.WHITE

    def test_display_name(self) -> None:
        assert Side.WHITE.display_name == "White"
        assert Side.BLACK.display_name == "Black"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("white", Side.WHITE), ("W", Side.WHITE), (" Black ", Side.BLACK), ("b", Side.BLACK)],
    )
    def test_parse(self, text: str, expected: Side) -> None:
        assert Side.parse(text) == expected

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            Side.parse("red")


class TestPieceType:
    def test_letters_round_trip(self) -> None:
        for kind in PieceType:
            assert PieceType.from_letter(kind.letter) == kind
            assert PieceType.from_letter(kind.letter.upper()) == kind

    def test_from_letter_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            PieceType.from_letter("x")
        with pytest.raises(ValueError):
            PieceType.from_letter("qq")

    def test_values(self) -> None:
        assert PieceType.PAWN.value_points == 1
        assert PieceType.QUEEN.value_points == 9
        assert PieceType.KING.value_points == 0


class TestMoves:
    def test_square_names(self) -> None:
        assert is_square_name("e4")
        assert is_square_name("h8")
        assert not is_square_name("i1")
        assert not is_square_name("a9")
        assert not is_square_name("e")

    def test_proposal_uci(self) -> None:
        assert MoveProposal("e2", "e4").uci == "e2e4"
        assert MoveProposal("e7", "e8", PieceType.QUEEN).uci == "e7e8q"
        assert str(MoveProposal("g1", "f3")) == "g1f3"

    def test_played_move_capture_flag(self) -> None:
        quiet = PlayedMove("e2", "e4", Side.WHITE, "e4")
        take = PlayedMove("e4", "d5", Side.WHITE, "exd5", captured=PieceType.PAWN)
        assert not quiet.is_capture
        assert take.is_capture
        assert str(take) == "exd5"
