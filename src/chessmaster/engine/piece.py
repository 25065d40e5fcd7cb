from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .move import Position


class Color(str, Enum):
    """Side to play. White moves first and starts on rows 6/7."""

    WHITE = "white"
    BLACK = "black"

    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        # Row delta of a single pawn step
        return -1 if self is Color.WHITE else 1

    @property
    def pawn_start_row(self) -> int:
        return 6 if self is Color.WHITE else 1


class PieceType(str, Enum):
    KING = "king"
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
    PAWN = "pawn"


PIECE_TYPE_TO_CHAR = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
CHAR_TO_PIECE_TYPE = {v: k for k, v in PIECE_TYPE_TO_CHAR.items()}


@dataclass(frozen=True)
class Piece:
    """A piece standing on the board.

    Attributes:
        type (PieceType): Kind of piece.
        color (Color): Owning side.
        position (Position): Square the piece occupies. Must match the slot
            holding the piece on its board.
        has_moved (bool): Whether the piece has moved during the game.
    """

    type: PieceType
    color: Color
    position: Position
    has_moved: bool = False

    @classmethod
    def from_char(cls, ch: str, position: Position) -> "Piece":
        """Build a piece from a FEN letter (uppercase white, lowercase black).

        Raises:
            ValueError: If ``ch`` is not a piece letter.
        """
        kind = CHAR_TO_PIECE_TYPE.get(ch.lower())
        if kind is None or len(ch) != 1:
            raise ValueError(f"invalid piece character: {ch!r}")
        color = Color.WHITE if ch.isupper() else Color.BLACK
        return cls(type=kind, color=color, position=position)

    def to_char(self) -> str:
        ch = PIECE_TYPE_TO_CHAR[self.type]
        return ch.upper() if self.color is Color.WHITE else ch

    def moved_to(self, position: Position, *, mark_moved: bool = False) -> "Piece":
        """Return a copy of this piece standing on ``position``."""
        return replace(self, position=position, has_moved=self.has_moved or mark_moved)
