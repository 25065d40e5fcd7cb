from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from chessmaster.engine.board import Board
from chessmaster.engine.move import Move
from chessmaster.engine.piece import Color
from chessmaster.engine.rules import legal_moves
from chessmaster.eval import capture_value, score_move


logger = logging.getLogger(__name__)

# The computer always plays the second side.
AI_COLOR = Color.BLACK

MoveScorer = Callable[[Board, Move], float]


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: str) -> "Difficulty":
        """Parse ``"easy"``, ``"medium"`` or ``"hard"`` (case-insensitive).

        Raises:
            ValueError: For any other value.
        """
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError) as e:
            raise ValueError(f"invalid difficulty: {value!r}") from e


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: Optional[float]
    candidates: int
    difficulty: Difficulty
    time_ms: int


class SearchService:
    """Opponent move selection over a single ply.

    The hard tier ranks moves with ``scorer``; swap it to plug in another
    evaluation without touching move generation or the self-check filter.
    """

    def __init__(self, scorer: MoveScorer = score_move, rng: Optional[random.Random] = None) -> None:
        self.scorer = scorer
        self._rng = rng

    def search(self, board: Board, difficulty: Difficulty) -> SearchResult:
        start = time.perf_counter()
        moves = legal_moves(board, AI_COLOR)

        best: Optional[Move] = None
        score: Optional[float] = None
        if moves:
            if difficulty is Difficulty.EASY:
                best = self._random_move(moves)
            elif difficulty is Difficulty.MEDIUM:
                best = self._best_capture(board, moves)
            else:
                best, score = self._best_scored(board, moves)

        result = SearchResult(
            best_move=best,
            score=score,
            candidates=len(moves),
            difficulty=difficulty,
            time_ms=int((time.perf_counter() - start) * 1000),
        )
        logger.debug(
            "search",
            extra={
                "difficulty": difficulty.value,
                "candidates": result.candidates,
                "best_move": best.to_uci() if best else None,
                "time_ms": result.time_ms,
            },
        )
        return result

    def _random_move(self, moves: List[Move]) -> Move:
        rng = self._rng if self._rng is not None else random
        return rng.choice(moves)

    def _best_capture(self, board: Board, moves: List[Move]) -> Move:
        # First capture of the highest value wins; no capture falls back to random
        best: Optional[Move] = None
        best_value = -1
        for m in moves:
            if board.piece_at(m.to_pos) is None:
                continue
            value = capture_value(board, m)
            if value > best_value:
                best, best_value = m, value
        if best is None:
            return self._random_move(moves)
        return best

    def _best_scored(self, board: Board, moves: List[Move]) -> tuple[Move, float]:
        best = moves[0]
        best_score = float("-inf")
        for m in moves:
            s = self.scorer(board, m)
            if s > best_score:
                best, best_score = m, s
        return best, best_score


def generate_move(
    board: Board, difficulty: Difficulty, *, rng: Optional[random.Random] = None
) -> Optional[Move]:
    """Pick the opponent's move for ``board`` at ``difficulty``.

    Returns:
        Optional[Move]: ``None`` when black has no legal move; the caller tells
            checkmate from stalemate with the rules module.
    """
    return SearchService(rng=rng).search(board, difficulty).best_move
