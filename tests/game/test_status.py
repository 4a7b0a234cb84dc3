"""Tests for status text."""

from __future__ import annotations

from pawnbridge.game.status import is_terminal, status_text
from pawnbridge.rules.python_chess import ChessRules


def test_white_to_move_at_start() -> None:
    rules = ChessRules()
    assert status_text(rules) == "White to move"
    assert not is_terminal(rules)


def test_black_to_move_after_e4() -> None:
    rules = ChessRules()
    rules.apply_move("e2", "e4")
    assert status_text(rules) == "Black to move"


def test_check_is_appended() -> None:
    rules = ChessRules("4k3/8/8/8/8/8/4R3/4K3 b - - 0 1")
    assert status_text(rules) == "Black to move, Black is in check"


def test_checkmate_names_the_mated_side() -> None:
    rules = ChessRules()
    for uci in ("f2f3", "e7e5", "g2g4", "d8h4"):
        rules.apply_move(uci[:2], uci[2:])
    assert status_text(rules) == "Game over, White is in checkmate."
    assert is_terminal(rules)


def test_draw() -> None:
    rules = ChessRules("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
    assert status_text(rules) == "Game over, drawn position"
    assert is_terminal(rules)


def test_status_is_idempotent() -> None:
    rules = ChessRules()
    rules.apply_move("e2", "e4")
    assert status_text(rules) == status_text(rules)
