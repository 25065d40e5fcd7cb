from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    bad_request,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...config import Settings
from ...engine.board import Board
from ...engine.game import Game, GameMode
from ...engine.move import parse_uci, position_to_str, str_to_position
from ...engine.piece import Color
from ...engine.rules import GameStatus, game_status, legal_destinations, legal_moves, safe_destinations
from ...search.service import Difficulty, SearchService


logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    fen: str = Field(..., description="FEN piece placement; extra fields ignored")
    color: Color = Field(default=Color.WHITE, description="Side to analyze")


class AnalyzeResponse(BaseModel):
    status: GameStatus
    in_check: bool
    checkmate: bool
    stalemate: bool
    legal_moves: List[str]


class DestinationsRequest(BaseModel):
    fen: str
    square: str = Field(..., description="Square of the piece, e.g. e2")
    safe: bool = Field(default=False, description="Drop moves that expose the own king")


class DestinationsResponse(BaseModel):
    square: str
    destinations: List[str]


class AIMoveRequest(BaseModel):
    fen: str
    difficulty: Optional[Difficulty] = None


class AIMoveResponse(BaseModel):
    move: Optional[str]
    score: Optional[float]
    candidates: int
    difficulty: Difficulty


class CreateGameRequest(BaseModel):
    mode: GameMode = GameMode.PVP
    fen: Optional[str] = Field(default=None, description="Start from this position")


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class MoveRequest(BaseModel):
    move: str = Field(..., description="Long algebraic move, e.g. e2e4")


class GameState(BaseModel):
    game_id: str
    fen: str
    mode: GameMode
    side_to_move: Color
    status: GameStatus
    in_check: bool
    legal_moves: List[str]
    last_move: Optional[str]
    move_history: List[str]
    captured: Dict[Color, List[str]]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Chess Master API", version="0.1.0")

    logging.basicConfig(level=settings.log_level)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    service = SearchService()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    # --- Stateless analysis: the board travels with every request ---

    @app.post("/api/analyze", response_model=AnalyzeResponse)
    async def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
        board = _parse_board(req.fen)
        status = game_status(board, req.color)
        return AnalyzeResponse(
            status=status,
            in_check=status in (GameStatus.CHECK, GameStatus.CHECKMATE),
            checkmate=status is GameStatus.CHECKMATE,
            stalemate=status is GameStatus.STALEMATE,
            legal_moves=[m.to_uci() for m in legal_moves(board, req.color)],
        )

    @app.post("/api/destinations", response_model=DestinationsResponse)
    async def destinations(req: DestinationsRequest) -> DestinationsResponse:
        board = _parse_board(req.fen)
        try:
            pos = str_to_position(req.square)
        except ValueError as e:
            raise bad_request(e)
        piece = board.piece_at(pos)
        if piece is None:
            raise HTTPException(status_code=400, detail=f"no piece on {req.square}")
        targets = (safe_destinations if req.safe else legal_destinations)(board, piece, pos)
        return DestinationsResponse(
            square=req.square, destinations=[position_to_str(t) for t in targets]
        )

    @app.post("/api/ai-move", response_model=AIMoveResponse)
    async def ai_move(req: AIMoveRequest) -> AIMoveResponse:
        board = _parse_board(req.fen)
        difficulty = req.difficulty or settings.default_difficulty
        res = service.search(board, difficulty)
        return AIMoveResponse(
            move=res.best_move.to_uci() if res.best_move else None,
            score=res.score,
            candidates=res.candidates,
            difficulty=difficulty,
        )

    # --- Sessions ---

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        req = req or CreateGameRequest()
        if req.fen:
            try:
                game = Game.from_fen(req.fen, req.mode)
            except ValueError as e:
                raise bad_request(e)
        else:
            game = Game.new(req.mode)
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id, "mode": req.mode.value})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _game_state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            move = parse_uci(req.move)
        except ValueError as e:
            raise bad_request(e)
        with store.locked():
            try:
                game.apply_move(move)
            except ValueError as e:
                raise bad_request(e)
            return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/ai-move", response_model=GameState)
    async def play_ai_move(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        with store.locked():
            try:
                move = game.ai_move(service)
            except ValueError as e:
                raise HTTPException(status_code=409, detail=str(e))
            if move is None:
                logger.info("no move for computer", extra={"game_id": game_id})
            return _game_state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        with store.locked():
            try:
                game.undo_move()
            except ValueError as e:
                raise bad_request(e)
            return _game_state(game_id, game)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    return app


def _parse_board(fen: str) -> Board:
    try:
        return Board.from_fen(fen)
    except ValueError as e:
        raise bad_request(e)


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _game_state(game_id: str, game: Game) -> GameState:
    status = game.status()
    history = game.move_history_uci()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        mode=game.mode,
        side_to_move=game.side_to_move,
        status=status,
        in_check=status in (GameStatus.CHECK, GameStatus.CHECKMATE),
        legal_moves=[m.to_uci() for m in game.legal_moves()],
        last_move=history[-1] if history else None,
        move_history=history,
        captured={color: [p.to_char() for p in pieces] for color, pieces in game.captured.items()},
    )
