from __future__ import annotations

from dataclasses import dataclass


FILES = "abcdefgh"


@dataclass(frozen=True)
class Position:
    """Board coordinate.

    Attributes:
        row (int): 0 is the eighth rank (black's home row), 7 the first rank.
        col (int): 0 is the a-file, 7 the h-file.

    Positions outside the 8x8 grid are representable; use ``in_bounds``.
    """

    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row <= 7 and 0 <= self.col <= 7

    def __str__(self) -> str:
        if not self.in_bounds():
            return f"({self.row}, {self.col})"
        return position_to_str(self)


@dataclass(frozen=True)
class Move:
    """Engine move: an ordered pair of squares without capture metadata.

    Attributes:
        from_pos (Position): Origin square.
        to_pos (Position): Destination square.
    """

    from_pos: Position
    to_pos: Position

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form.

        Returns:
            str: Move encoded like ``"e2e4"``.
        """
        return position_to_str(self.from_pos) + position_to_str(self.to_pos)


def parse_uci(uci: str) -> Move:
    """Parse a long algebraic move string.

    Args:
        uci (str): Move such as ``"e7e5"``.

    Returns:
        Move: Parsed move.

    Raises:
        ValueError: If the string has an invalid length or squares. Promotion
            suffixes are rejected since promotion is not modeled.
    """
    if len(uci) != 4:
        raise ValueError(f"invalid move: {uci!r}")
    return Move(str_to_position(uci[0:2]), str_to_position(uci[2:4]))


def str_to_position(s: str) -> Position:
    """Convert algebraic notation into a board position.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Position: ``a8`` maps to ``(0, 0)`` and ``h1`` to ``(7, 7)``.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    col = ord(s[0]) - ord("a")
    row = 8 - int(s[1])
    return Position(row, col)


def position_to_str(pos: Position) -> str:
    """Convert a board position into algebraic notation.

    Raises:
        ValueError: If ``pos`` is outside the board.
    """
    if not pos.in_bounds():
        raise ValueError(f"invalid position: ({pos.row}, {pos.col})")
    return FILES[pos.col] + str(8 - pos.row)
