"""Move legality, check detection and terminal states.

Every function here is pure: it reads a board snapshot and returns a value.
Special moves (castling, en passant, promotion) are not modeled.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .board import Board
from .move import Move, Position
from .piece import Color, Piece, PieceType


class GameStatus(str, Enum):
    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


ALL_SQUARES: Tuple[Position, ...] = tuple(Position(r, c) for r in range(8) for c in range(8))


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def is_path_clear(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Return True if every square strictly between the endpoints is empty.

    Steps along ``(sign(dr), sign(dc))``; callers guarantee the endpoints lie
    on a common rank, file or diagonal.
    """
    dr = _sign(to_pos.row - from_pos.row)
    dc = _sign(to_pos.col - from_pos.col)
    row, col = from_pos.row + dr, from_pos.col + dc
    while (row, col) != (to_pos.row, to_pos.col):
        if board.grid[row][col] is not None:
            return False
        row += dr
        col += dc
    return True


# --- Per-piece geometry. Each receives the board, endpoints and mover. ---


def _pawn(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> bool:
    direction = piece.color.pawn_direction
    row_diff = to_pos.row - from_pos.row
    col_diff = to_pos.col - from_pos.col
    target = board.piece_at(to_pos)

    if col_diff == 0:
        if target is not None:
            return False
        if row_diff == direction:
            return True
        # Only the destination is checked on the double step, not the square
        # jumped over.
        return from_pos.row == piece.color.pawn_start_row and row_diff == 2 * direction

    if abs(col_diff) == 1 and row_diff == direction:
        return target is not None
    return False


def _knight(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> bool:
    dr = abs(to_pos.row - from_pos.row)
    dc = abs(to_pos.col - from_pos.col)
    return (dr, dc) in ((2, 1), (1, 2))


def _rook(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> bool:
    if from_pos.row != to_pos.row and from_pos.col != to_pos.col:
        return False
    return is_path_clear(board, from_pos, to_pos)


def _bishop(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> bool:
    if abs(to_pos.row - from_pos.row) != abs(to_pos.col - from_pos.col):
        return False
    return is_path_clear(board, from_pos, to_pos)


def _queen(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> bool:
    dr = to_pos.row - from_pos.row
    dc = to_pos.col - from_pos.col
    straight = (dr == 0) != (dc == 0)
    diagonal = abs(dr) == abs(dc)
    if not straight and not diagonal:
        return False
    return is_path_clear(board, from_pos, to_pos)


def _king(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> bool:
    return abs(to_pos.row - from_pos.row) <= 1 and abs(to_pos.col - from_pos.col) <= 1


GeometryRule = Callable[[Board, Position, Position, Piece], bool]

GEOMETRY: Dict[PieceType, GeometryRule] = {
    PieceType.PAWN: _pawn,
    PieceType.KNIGHT: _knight,
    PieceType.BISHOP: _bishop,
    PieceType.ROOK: _rook,
    PieceType.QUEEN: _queen,
    PieceType.KING: _king,
}


def is_legal_geometry(board: Board, from_pos: Position, to_pos: Position, piece: Piece) -> bool:
    """Return True if ``piece`` may move from ``from_pos`` to ``to_pos``.

    Applies the movement pattern of the piece and path obstruction only; the
    safety of the mover's own king is not considered. ``piece`` is assumed to
    stand on ``from_pos``.

    Args:
        board (Board): Position to evaluate against.
        from_pos (Position): Origin square.
        to_pos (Position): Destination square, possibly off the board.
        piece (Piece): The moving piece.

    Returns:
        bool: False for off-board destinations and own-piece captures.
    """
    if not to_pos.in_bounds():
        return False
    target = board.grid[to_pos.row][to_pos.col]
    if target is not None and target.color is piece.color:
        return False
    return GEOMETRY[piece.type](board, from_pos, to_pos, piece)


def legal_destinations(board: Board, piece: Piece, from_pos: Position) -> List[Position]:
    """Return every square ``piece`` can reach by geometry, in row-major order.

    Does not filter moves that leave the mover's king in check; see
    ``safe_destinations`` for that.
    """
    return [to for to in ALL_SQUARES if is_legal_geometry(board, from_pos, to, piece)]


def safe_destinations(board: Board, piece: Piece, from_pos: Position) -> List[Position]:
    """Return the destinations of ``piece`` that keep its own king out of check."""
    return [
        to
        for to in legal_destinations(board, piece, from_pos)
        if not is_in_check(board.with_move(Move(from_pos, to)), piece.color)
    ]


def find_king(board: Board, color: Color) -> Optional[Position]:
    """Return the first square (row-major) holding a king of ``color``."""
    for piece in board.pieces(color):
        if piece.type is PieceType.KING:
            return piece.position
    return None


def is_in_check(board: Board, color: Color) -> bool:
    """Return True if the king of ``color`` is attacked.

    A side without a king is never in check.
    """
    king_pos = find_king(board, color)
    if king_pos is None:
        return False
    for piece in board.pieces(color.opponent()):
        if is_legal_geometry(board, piece.position, king_pos, piece):
            return True
    return False


def candidate_moves(board: Board, color: Color) -> Iterator[Move]:
    """Yield every geometrically legal move of ``color``, before the self-check filter."""
    for piece in board.pieces(color):
        for to in legal_destinations(board, piece, piece.position):
            yield Move(piece.position, to)


def legal_moves(board: Board, color: Color) -> List[Move]:
    """Return every move of ``color`` that does not leave its own king in check.

    Moves are ordered by the mover's square (row-major), then destination.
    """
    return [m for m in candidate_moves(board, color) if not is_in_check(board.with_move(m), color)]


def has_escape(board: Board, color: Color) -> bool:
    """Return True if some candidate move leaves ``color`` out of check."""
    for move in candidate_moves(board, color):
        if not is_in_check(board.with_move(move), color):
            return True
    return False


def is_checkmate(board: Board, color: Color) -> bool:
    """Return True if ``color`` is in check and no move gets it out."""
    if not is_in_check(board, color):
        return False
    return not has_escape(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    """Return True if ``color`` is not in check but has no safe move.

    A side without a king is never stalemated.
    """
    if find_king(board, color) is None or is_in_check(board, color):
        return False
    return not has_escape(board, color)


def game_status(board: Board, color: Color) -> GameStatus:
    """Classify the position for the side ``color`` about to move."""
    if find_king(board, color) is None:
        return GameStatus.PLAYING
    if is_in_check(board, color):
        return GameStatus.CHECK if has_escape(board, color) else GameStatus.CHECKMATE
    return GameStatus.PLAYING if has_escape(board, color) else GameStatus.STALEMATE
