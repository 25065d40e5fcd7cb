from __future__ import annotations

from typing import Dict

from .board import Board
from .piece import Color
from .rules import legal_moves


def perft(board: Board, color: Color, depth: int) -> int:
    """Count leaf positions reachable in ``depth`` plies, ``color`` moving first.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1),
      with sides alternating.

    Counts follow this engine's rule set, so they differ from standard perft
    tables once castling, en passant or promotion would matter.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in legal_moves(board, color):
        nodes += perft(board.with_move(m), color.opponent(), depth - 1)
    return nodes


def divide(board: Board, color: Color, depth: int) -> Dict[str, int]:
    """Return perft(depth - 1) per root move, keyed by long algebraic notation."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    return {
        m.to_uci(): perft(board.with_move(m), color.opponent(), depth - 1)
        for m in legal_moves(board, color)
    }
