"""Rules collaborator backed by the ``chess`` package."""

from __future__ import annotations

import chess

from pawnbridge.core.enums import PieceType, Side
from pawnbridge.core.move import PlayedMove


class ChessRules:
    """:class:`~pawnbridge.rules.interfaces.IRules` on top of ``chess.Board``.

    ``chess.Board.move_stack`` only stores bare moves, so the verbose history
    (SAN, moving side, captured kind) is kept alongside it and pushed/popped
    in lockstep.
    """

    __slots__ = ("_board", "_start_fen", "_played")

    def __init__(self, fen: str | None = None) -> None:
        self._start_fen = fen or chess.STARTING_FEN
        self._board = chess.Board(self._start_fen)
        self._played: list[PlayedMove] = []

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply_move(
        self, from_sq: str, to_sq: str, promotion: PieceType | None = None
    ) -> PlayedMove | None:
        try:
            origin = chess.parse_square(from_sq)
            target = chess.parse_square(to_sq)
        except ValueError:
            return None

        board = self._board
        piece = board.piece_at(origin)
        if piece is None:
            return None

        # A promotion letter only matters for a pawn reaching the last rank;
        # everywhere else it is ignored rather than making the move illegal.
        promo: int | None = None
        if piece.piece_type == chess.PAWN and chess.square_rank(target) in (0, 7):
            promo = int(promotion) if promotion is not None else None

        move = chess.Move(origin, target, promotion=promo)
        if not board.is_legal(move):
            return None

        record = PlayedMove(
            from_sq=from_sq,
            to_sq=to_sq,
            side=Side.WHITE if board.turn == chess.WHITE else Side.BLACK,
            san=board.san(move),
            promotion=PieceType(promo) if promo is not None else None,
            captured=self._captured_kind(move),
        )
        board.push(move)
        self._played.append(record)
        return record

    def undo(self) -> PlayedMove | None:
        if not self._played:
            return None
        self._board.pop()
        return self._played.pop()

    def reset(self) -> None:
        self._board = chess.Board(self._start_fen)
        self._played.clear()

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, square: str) -> list[str]:
        try:
            origin = chess.parse_square(square)
        except ValueError:
            return []
        targets: list[str] = []
        for move in self._board.legal_moves:
            if move.from_square != origin:
                continue
            name = chess.square_name(move.to_square)
            if name not in targets:  # promotions share a destination
                targets.append(name)
        return targets

    def turn(self) -> Side:
        return Side.WHITE if self._board.turn == chess.WHITE else Side.BLACK

    def in_check(self) -> bool:
        return self._board.is_check()

    def in_checkmate(self) -> bool:
        return self._board.is_checkmate()

    def in_draw(self) -> bool:
        board = self._board
        return (
            board.is_stalemate()
            or board.is_insufficient_material()
            or board.is_fifty_moves()
            or board.is_repetition(3)
        )

    def history(self) -> tuple[PlayedMove, ...]:
        return tuple(self._played)

    def position(self) -> str:
        return self._board.fen()

    # ── Internal ─────────────────────────────────────────────────────────

    def _captured_kind(self, move: chess.Move) -> PieceType | None:
        board = self._board
        if not board.is_capture(move):
            return None
        if board.is_en_passant(move):
            return PieceType.PAWN
        victim = board.piece_at(move.to_square)
        return PieceType(victim.piece_type) if victim is not None else None
