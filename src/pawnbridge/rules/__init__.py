"""Rules collaborator: interface and the ``chess``-package adapter."""

from pawnbridge.rules.interfaces import IRules
from pawnbridge.rules.python_chess import ChessRules

__all__ = ["ChessRules", "IRules"]
