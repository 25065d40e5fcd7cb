from __future__ import annotations

import pytest

from chessmaster.engine.board import Board
from chessmaster.engine.move import str_to_position
from chessmaster.engine.piece import Color
from chessmaster.engine.rules import find_king, is_in_check


def test_startpos_neither_side_in_check() -> None:
    b = Board.startpos()
    assert not is_in_check(b, Color.WHITE)
    assert not is_in_check(b, Color.BLACK)


def test_find_king() -> None:
    b = Board.startpos()
    assert find_king(b, Color.WHITE) == str_to_position("e1")
    assert find_king(b, Color.BLACK) == str_to_position("e8")


def test_missing_king_is_not_in_check() -> None:
    b = Board.from_fen("8/8/8/8/8/8/8/Q3K3")
    assert find_king(b, Color.BLACK) is None
    assert not is_in_check(b, Color.BLACK)
    assert not is_in_check(Board.empty(), Color.WHITE)


@pytest.mark.parametrize(
    "fen,expected",
    [
        ("4k3/8/8/8/8/8/8/4R2K", True),  # rook on the e-file
        ("4k3/8/8/8/B7/8/8/7K", True),  # bishop a4
        ("4k3/8/8/8/Q7/8/8/7K", True),  # queen a4
        ("4k3/8/8/8/8/8/8/Q6K", False),  # queen a1 sees neither file nor diagonal
        ("4k3/8/8/8/8/8/8/B6K", False),
    ],
)
def test_sliders_give_check(fen: str, expected: bool) -> None:
    b = Board.from_fen(fen)
    assert is_in_check(b, Color.BLACK) is expected


def test_knight_check() -> None:
    b = Board.from_fen("4k3/8/3N4/8/8/8/8/7K")
    assert is_in_check(b, Color.BLACK)


def test_blocked_slider_does_not_check() -> None:
    b = Board.from_fen("4k3/4p3/8/8/8/8/8/4R2K")
    assert not is_in_check(b, Color.BLACK)


def test_pawn_attacks_diagonally_only() -> None:
    # White pawn d4 attacks c5 and e5
    assert is_in_check(Board.from_fen("8/8/8/4k3/3P4/8/8/7K"), Color.BLACK)
    # Straight ahead is not an attack
    assert not is_in_check(Board.from_fen("8/8/8/3k4/3P4/8/8/7K"), Color.BLACK)
    # Black pawn e5 attacks d4 and f4
    assert is_in_check(Board.from_fen("7k/8/8/4p3/3K4/8/8/8"), Color.WHITE)


def test_adjacent_king_gives_check() -> None:
    b = Board.from_fen("8/8/8/3kK3/8/8/8/8")
    assert is_in_check(b, Color.BLACK)
    assert is_in_check(b, Color.WHITE)


MIRROR_POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
    "4k3/8/8/8/8/8/8/4R2K",
    "8/8/8/4k3/3P4/8/8/7K",
    "8/8/8/3k4/3P4/8/8/7K",
    "7k/8/8/4p3/3K4/8/8/8",
    "4k3/4p3/8/8/8/8/8/4R2K",
    "3k4/R7/1N3N2/8/8/8/8/3Q3K",
    "7k/5Q2/6K1/8/8/8/8/8",
    "r3k2r/ppp2ppp/2n5/1B1pp3/4P1b1/2N2N2/PPPP1PPP/R1BQK2R",
]


@pytest.mark.parametrize("fen", MIRROR_POSITIONS)
@pytest.mark.parametrize("color", list(Color))
def test_check_is_symmetric_under_mirror(fen: str, color: Color) -> None:
    b = Board.from_fen(fen)
    assert is_in_check(b, color) == is_in_check(b.mirror(), color.opponent())
