"""Human-readable game status, computed from the rules state alone."""

from __future__ import annotations

from pawnbridge.rules.interfaces import IRules


def is_terminal(rules: IRules) -> bool:
    """Checkmate or draw: no further moves can be played."""
    return rules.in_checkmate() or rules.in_draw()


def status_text(rules: IRules) -> str:
    """Status line for the current position.

    Checkmate wins over draw, draw over everything else. In checkmate the
    side *to move* is the one that has been mated.
    """
    side = rules.turn().display_name

    if rules.in_checkmate():
        return f"Game over, {side} is in checkmate."

    if rules.in_draw():
        return "Game over, drawn position"

    text = f"{side} to move"
    if rules.in_check():
        text += f", {side} is in check"
    return text
