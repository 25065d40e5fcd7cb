"""Move-scoring heuristics for the computer opponent.

Pure, deterministic, and side-effect free.
"""

from __future__ import annotations

from typing import Dict, Final

from chessmaster.engine.board import Board
from chessmaster.engine.move import Move, Position
from chessmaster.engine.piece import PieceType


# Material values in pawns
PIECE_VALUES: Final[Dict[PieceType, int]] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

# Positional weights
CENTER_ROW: Final = 3.5
CENTER_COL: Final = 3.5
CENTER_WEIGHT: Final = 0.1
CENTER_MAX_DISTANCE: Final = 7
DEVELOPMENT_BONUS: Final = 0.2
DEVELOPING_PIECES: Final = frozenset({PieceType.KNIGHT, PieceType.BISHOP})
# Row a developing piece must leave to earn the bonus (black's back rank)
DEVELOPMENT_ROW: Final = 0


def capture_value(board: Board, move: Move) -> int:
    """Return the material value of the piece on the destination, or 0."""
    target = board.piece_at(move.to_pos)
    if target is None:
        return 0
    return PIECE_VALUES[target.type]


def center_distance(pos: Position) -> float:
    # Manhattan distance to the geometric centre of the board
    return abs(pos.row - CENTER_ROW) + abs(pos.col - CENTER_COL)


def center_bonus(move: Move) -> float:
    return CENTER_WEIGHT * (CENTER_MAX_DISTANCE - center_distance(move.to_pos))


def development_bonus(board: Board, move: Move) -> float:
    piece = board.piece_at(move.from_pos)
    if piece is None or piece.type not in DEVELOPING_PIECES:
        return 0.0
    return DEVELOPMENT_BONUS if move.from_pos.row == DEVELOPMENT_ROW else 0.0


def score_move(board: Board, move: Move) -> float:
    """Single-ply score: material won plus centralisation and development.

    Args:
        board (Board): Position before the move.
        move (Move): Candidate move.

    Returns:
        float: Higher is better for the moving side. Does not look at replies.
    """
    return capture_value(board, move) + center_bonus(move) + development_bonus(board, move)
