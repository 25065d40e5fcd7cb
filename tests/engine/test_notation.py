from __future__ import annotations

import pytest

from chessmaster.engine.move import Move, Position, parse_uci, position_to_str, str_to_position
from chessmaster.engine.piece import Color, Piece, PieceType


def test_square_names_map_to_rows_and_columns() -> None:
    assert str_to_position("a8") == Position(0, 0)
    assert str_to_position("h1") == Position(7, 7)
    assert str_to_position("e2") == Position(6, 4)
    assert position_to_str(Position(4, 3)) == "d4"


@pytest.mark.parametrize("bad", ["", "e", "i1", "a0", "a9", "e22"])
def test_str_to_position_rejects_invalid(bad: str) -> None:
    with pytest.raises(ValueError):
        str_to_position(bad)


def test_position_to_str_rejects_off_board() -> None:
    with pytest.raises(ValueError):
        position_to_str(Position(8, 0))
    # str() stays usable for diagnostics
    assert str(Position(-1, 3)) == "(-1, 3)"


def test_parse_uci() -> None:
    mv = parse_uci("e2e4")
    assert mv == Move(Position(6, 4), Position(4, 4))
    assert mv.to_uci() == "e2e4"


@pytest.mark.parametrize("bad", ["", "e2", "e7e8q", "z2e4", "e2e9"])
def test_parse_uci_rejects_invalid(bad: str) -> None:
    with pytest.raises(ValueError):
        parse_uci(bad)


def test_piece_chars() -> None:
    p = Piece.from_char("N", Position(7, 1))
    assert p.type is PieceType.KNIGHT and p.color is Color.WHITE
    assert p.to_char() == "N"
    assert Piece.from_char("q", Position(0, 3)).to_char() == "q"
    with pytest.raises(ValueError):
        Piece.from_char("x", Position(0, 0))


def test_color_helpers() -> None:
    assert Color.WHITE.opponent() is Color.BLACK
    assert Color.BLACK.opponent() is Color.WHITE
    assert Color.WHITE.pawn_direction == -1 and Color.BLACK.pawn_direction == 1
    assert Color.WHITE.pawn_start_row == 6 and Color.BLACK.pawn_start_row == 1
