"""GameSession — rules, ledger and captured pieces mutated as one unit."""

from __future__ import annotations

from pawnbridge.core.move import MoveProposal, PlayedMove
from pawnbridge.game.captured import CapturedPieceTracker
from pawnbridge.game.ledger import MoveLedger
from pawnbridge.rules.interfaces import IRules
from pawnbridge.rules.python_chess import ChessRules


class GameSession:
    """One game's mutable state.

    Invariant: ``len(ledger) == len(rules.history())`` after every public
    method returns. Nothing else should mutate the rules or the ledger.
    """

    __slots__ = ("_rules", "_ledger", "_captured")

    def __init__(self, rules: IRules | None = None) -> None:
        self._rules: IRules = rules if rules is not None else ChessRules()
        self._ledger = MoveLedger()
        self._captured = CapturedPieceTracker()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def rules(self) -> IRules:
        return self._rules

    @property
    def ledger(self) -> MoveLedger:
        return self._ledger

    @property
    def captured(self) -> CapturedPieceTracker:
        return self._captured

    @property
    def fen(self) -> str:
        return self._rules.position()

    @property
    def ply_count(self) -> int:
        return len(self._ledger)

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply(self, proposal: MoveProposal) -> PlayedMove | None:
        """Play *proposal* if legal; ``None`` leaves everything untouched."""
        played = self._rules.apply_move(
            proposal.from_sq, proposal.to_sq, proposal.promotion
        )
        if played is None:
            return None
        self._ledger.append(played)
        self._captured.apply_incremental(played)
        return played

    def undo(self, plies: int) -> bool:
        """Take back *plies* half-moves; False (no change) if history is short."""
        if plies <= 0 or plies > len(self._ledger):
            return False
        for _ in range(plies):
            self._rules.undo()
        self._ledger.truncate_last(plies)
        self._captured.recompute_from(self._ledger.entries())
        return True

    def reset(self) -> None:
        self._rules.reset()
        self._ledger.clear()
        self._captured.clear()

    def is_consistent(self) -> bool:
        return len(self._ledger) == len(self._rules.history())
