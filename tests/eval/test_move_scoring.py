from __future__ import annotations

import pytest

from chessmaster.engine.board import Board
from chessmaster.engine.move import parse_uci
from chessmaster.engine.piece import PieceType
from chessmaster.eval import (
    PIECE_VALUES,
    capture_value,
    center_bonus,
    development_bonus,
    score_move,
)


def test_piece_values() -> None:
    assert PIECE_VALUES == {
        PieceType.PAWN: 1,
        PieceType.KNIGHT: 3,
        PieceType.BISHOP: 3,
        PieceType.ROOK: 5,
        PieceType.QUEEN: 9,
        PieceType.KING: 0,
    }


def test_capture_value_reads_destination() -> None:
    b = Board.from_fen("7k/8/8/R2r4/8/8/3P4/K7")
    assert capture_value(b, parse_uci("d5a5")) == 5
    assert capture_value(b, parse_uci("d5d2")) == 1
    assert capture_value(b, parse_uci("d5d4")) == 0


@pytest.mark.parametrize(
    "uci,expected",
    [
        ("d2d4", 0.6),  # d4 sits next to the centre: distance 1
        ("e7e5", 0.6),
        ("a2a3", 0.2),  # a3: 3.5 + 1.5
        ("h7h8", 0.0),  # corner: distance 7
    ],
)
def test_center_bonus(uci: str, expected: float) -> None:
    assert center_bonus(parse_uci(uci)) == pytest.approx(expected)


def test_development_bonus_for_minor_pieces_leaving_back_rank() -> None:
    b = Board.startpos()
    assert development_bonus(b, parse_uci("b8c6")) == pytest.approx(0.2)
    assert development_bonus(b, parse_uci("c8e6")) == pytest.approx(0.2)
    # Pawns and rooks never earn it
    assert development_bonus(b, parse_uci("e7e5")) == 0.0
    assert development_bonus(b, parse_uci("a8a6")) == 0.0
    # Minor piece already developed
    moved = b.with_move(parse_uci("b8c6"))
    assert development_bonus(moved, parse_uci("c6d4")) == 0.0


def test_score_move_sums_terms() -> None:
    b = Board.startpos()
    mv = parse_uci("g8f6")
    # f6: distance 1.5 + 1.5 = 3
    assert score_move(b, mv) == pytest.approx(0.1 * 4 + 0.2)
    capture_board = Board.from_fen("k7/p7/PQ6/P7/8/7p/8/7K")
    assert score_move(capture_board, parse_uci("a7b6")) == pytest.approx(9.3)
