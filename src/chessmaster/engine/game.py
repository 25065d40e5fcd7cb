from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from chessmaster.search.service import AI_COLOR, Difficulty, SearchService

from .board import Board
from .move import Move
from .piece import Color, Piece
from .rules import GameStatus, game_status, legal_moves


class GameMode(str, Enum):
    PVP = "pvp"
    AI_EASY = "ai-easy"
    AI_MEDIUM = "ai-medium"
    AI_HARD = "ai-hard"

    @property
    def difficulty(self) -> Optional[Difficulty]:
        if self is GameMode.PVP:
            return None
        return Difficulty(self.value.split("-", 1)[1])


@dataclass
class _Snapshot:
    board: Board
    side_to_move: Color
    captured: Optional[Piece]


@dataclass
class Game:
    """Game wrapper around an immutable board.

    Responsibility: track whose turn it is, captured pieces and the move list,
    validate and apply moves, and ask the opponent for a reply. Not persisted.
    """

    board: Board
    side_to_move: Color = Color.WHITE
    mode: GameMode = GameMode.PVP
    fullmove_number: int = 1
    captured: Dict[Color, List[Piece]] = field(
        default_factory=lambda: {Color.WHITE: [], Color.BLACK: []}
    )
    move_stack: List[Move] = field(default_factory=list)
    _undo: List[_Snapshot] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls, mode: GameMode = GameMode.PVP) -> "Game":
        return cls(board=Board.startpos(), mode=mode)

    @classmethod
    def from_fen(cls, fen: str, mode: GameMode = GameMode.PVP) -> "Game":
        """Load a position from FEN.

        Only the placement, side-to-move and fullmove fields are read; castling
        and en passant fields are ignored.

        Raises:
            ValueError: If the placement or side to move is invalid.
        """
        board = Board.from_fen(fen)
        parts = fen.strip().split()
        side = Color.WHITE
        if len(parts) >= 2:
            if parts[1] not in ("w", "b"):
                raise ValueError("side to move must be 'w' or 'b'")
            side = Color.WHITE if parts[1] == "w" else Color.BLACK
        fullmove = 1
        if len(parts) >= 6:
            try:
                fullmove = int(parts[5])
            except ValueError as e:
                raise ValueError("invalid move counters in FEN") from e
            if fullmove <= 0:
                raise ValueError("invalid move counters in FEN")
        return cls(board=board, side_to_move=side, mode=mode, fullmove_number=fullmove)

    def to_fen(self) -> str:
        stm = "w" if self.side_to_move is Color.WHITE else "b"
        return f"{self.board.to_fen()} {stm} - - 0 {self.fullmove_number}"

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.board, self.side_to_move)

    def apply_move(self, move: Move) -> None:
        # Validate legality, including the self-check filter
        if move not in self.legal_moves():
            raise ValueError("illegal move")
        captured = self.board.piece_at(move.to_pos)
        self._undo.append(_Snapshot(self.board, self.side_to_move, captured))
        if captured is not None:
            self.captured[captured.color].append(captured)
        self.board = self.board.with_move(move, mark_moved=True)
        self.move_stack.append(move)
        if self.side_to_move is Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opponent()

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        snap = self._undo.pop()
        self.move_stack.pop()
        if snap.captured is not None:
            self.captured[snap.captured.color].pop()
        if snap.side_to_move is Color.BLACK:
            self.fullmove_number -= 1
        self.board = snap.board
        self.side_to_move = snap.side_to_move

    def ai_move(self, service: Optional[SearchService] = None) -> Optional[Move]:
        """Let the computer play black's move.

        Returns:
            Optional[Move]: The move played, or ``None`` if black has no legal
                move (the game is over).

        Raises:
            ValueError: In player-vs-player mode or when it is not black's turn.
        """
        difficulty = self.mode.difficulty
        if difficulty is None:
            raise ValueError("no computer opponent in pvp mode")
        if self.side_to_move is not AI_COLOR:
            raise ValueError("not the computer's turn")
        service = service or SearchService()
        move = service.search(self.board, difficulty).best_move
        if move is not None:
            self.apply_move(move)
        return move

    # --- State flags for protocol ---
    def status(self) -> GameStatus:
        return game_status(self.board, self.side_to_move)

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]
