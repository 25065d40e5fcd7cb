from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .move import Move, Position
from .piece import Color, Piece, PieceType


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

Row = Tuple[Optional[Piece], ...]
Grid = Tuple[Row, ...]

_EMPTY_ROW: Row = (None,) * 8


@dataclass(frozen=True)
class Board:
    """Immutable 8x8 snapshot of the pieces on the board.

    Notes:
    - ``grid[row][col]``; row 0 is black's home row, row 7 white's.
    - Boards never change after construction. ``with_move`` builds a new board
      that shares every untouched row with its parent, so simulating a move
      costs two row copies.
    - The board carries no side to move; that belongs to the game session.
    """

    grid: Grid

    def __post_init__(self) -> None:
        if len(self.grid) != 8 or any(len(row) != 8 for row in self.grid):
            raise ValueError("board grid must be 8x8")

    @classmethod
    def empty(cls) -> "Board":
        return cls(grid=(_EMPTY_ROW,) * 8)

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board set up in the standard starting position.

        Returns:
            Board: Black on rows 0/1, white on rows 6/7.
        """
        return cls.from_pieces(_starting_pieces())

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> "Board":
        """Create a board holding ``pieces`` on their own positions.

        Raises:
            ValueError: If a piece is off the board or two pieces share a
                square.
        """
        rows: List[List[Optional[Piece]]] = [[None] * 8 for _ in range(8)]
        for piece in pieces:
            pos = piece.position
            if not pos.in_bounds():
                raise ValueError(f"piece off the board: {pos}")
            if rows[pos.row][pos.col] is not None:
                raise ValueError(f"square {pos} occupied twice")
            rows[pos.row][pos.col] = piece
        return cls(grid=tuple(tuple(r) for r in rows))

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from the piece-placement field of a FEN string.

        Args:
            fen (str): Either a bare placement (``"8/8/.../8"``) or a full FEN;
                fields after the placement are ignored.

        Returns:
            Board: Board with every piece marked as not yet moved.

        Raises:
            ValueError: If the placement is empty, has the wrong number of
                ranks, or contains invalid characters or rank lengths.
        """
        if not fen or not isinstance(fen, str) or not fen.strip():
            raise ValueError("FEN must be a non-empty string")
        placement = fen.strip().split()[0]

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        pieces: List[Piece] = []
        for row, rank in enumerate(ranks):  # rank 8 first == row 0
            col = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    col += n
                else:
                    if col >= 8:
                        raise ValueError("too many squares in FEN rank")
                    pieces.append(Piece.from_char(ch, Position(row, col)))
                    col += 1
            if col != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")
        return cls.from_pieces(pieces)

    def to_fen(self) -> str:
        """Serialize the piece placement into a FEN placement field."""
        ranks_str: List[str] = []
        for row in self.grid:
            run = 0
            out = []
            for piece in row:
                if piece is None:
                    run += 1
                    continue
                if run > 0:
                    out.append(str(run))
                    run = 0
                out.append(piece.to_char())
            if run > 0:
                out.append(str(run))
            ranks_str.append("".join(out))
        return "/".join(ranks_str)

    def piece_at(self, pos: Position) -> Optional[Piece]:
        """Return the piece on ``pos``, or ``None`` when empty or off the board."""
        if not pos.in_bounds():
            return None
        return self.grid[pos.row][pos.col]

    def pieces(self, color: Optional[Color] = None) -> Iterator[Piece]:
        """Yield pieces in row-major order, optionally only those of ``color``."""
        for row in self.grid:
            for piece in row:
                if piece is not None and (color is None or piece.color is color):
                    yield piece

    def with_move(self, move: Move, *, mark_moved: bool = False) -> "Board":
        """Return a new board with the piece on ``move.from_pos`` moved.

        The source square is cleared and the destination overwritten by the
        moving piece; whatever stood there disappears. No legality check is
        performed. When ``mark_moved`` is set the moved piece gets
        ``has_moved=True``.

        Raises:
            ValueError: If the source square is empty or either square is off
                the board.
        """
        src, dst = move.from_pos, move.to_pos
        if not src.in_bounds() or not dst.in_bounds():
            raise ValueError(f"move off the board: {src} -> {dst}")
        piece = self.grid[src.row][src.col]
        if piece is None:
            raise ValueError(f"no piece on {src}")

        rows = list(self.grid)
        src_row = list(rows[src.row])
        src_row[src.col] = None
        rows[src.row] = tuple(src_row)
        dst_row = list(rows[dst.row])
        dst_row[dst.col] = piece.moved_to(dst, mark_moved=mark_moved)
        rows[dst.row] = tuple(dst_row)
        return Board(grid=tuple(rows))

    def mirror(self) -> "Board":
        """Flip the board top-to-bottom and swap piece colors."""
        pieces = [
            Piece(
                type=p.type,
                color=p.color.opponent(),
                position=Position(7 - p.position.row, p.position.col),
                has_moved=p.has_moved,
            )
            for p in self.pieces()
        ]
        return Board.from_pieces(pieces)

    def pretty(self) -> str:
        """Render a text diagram with rank and file labels."""
        lines = []
        for row_idx, row in enumerate(self.grid):
            cells = [p.to_char() if p is not None else "." for p in row]
            lines.append(f"{8 - row_idx} " + " ".join(cells))
        lines.append("  a b c d e f g h")
        return "\n".join(lines)


def _starting_pieces() -> Iterator[Piece]:
    for col, kind in enumerate(BACK_RANK):
        yield Piece(kind, Color.BLACK, Position(0, col))
        yield Piece(kind, Color.WHITE, Position(7, col))
    for col in range(8):
        yield Piece(PieceType.PAWN, Color.BLACK, Position(1, col))
        yield Piece(PieceType.PAWN, Color.WHITE, Position(6, col))
