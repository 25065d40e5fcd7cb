from __future__ import annotations

from fastapi.testclient import TestClient

from chessmaster.config import Settings
from chessmaster.protocol.http.app import create_app
from chessmaster.search.service import Difficulty


START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
MATE = "3k4/R7/1N3N2/8/8/8/8/3Q3K"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8"
PINNED = "k3r3/8/8/8/8/8/4R3/4K3"


def _client(settings: Settings | None = None) -> TestClient:
    return TestClient(create_app(settings or Settings()))


def test_analyze_startpos() -> None:
    r = _client().post("/api/analyze", json={"fen": START})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "playing"
    assert body["in_check"] is False
    assert body["checkmate"] is False
    assert body["stalemate"] is False
    assert len(body["legal_moves"]) == 20


def test_analyze_checkmate_for_black() -> None:
    r = _client().post("/api/analyze", json={"fen": MATE, "color": "black"})
    body = r.json()
    assert body["status"] == "checkmate"
    assert body["in_check"] is True and body["checkmate"] is True
    assert body["legal_moves"] == []


def test_analyze_accepts_full_fen() -> None:
    r = _client().post("/api/analyze", json={"fen": f"{STALEMATE} b - - 0 1", "color": "black"})
    assert r.json()["stalemate"] is True


def test_analyze_bad_fen_is_400() -> None:
    r = _client().post("/api/analyze", json={"fen": "nonsense"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"


def test_destinations_raw_and_safe() -> None:
    client = _client()
    raw = client.post("/api/destinations", json={"fen": PINNED, "square": "e2"}).json()
    assert raw["square"] == "e2"
    assert "d2" in raw["destinations"]

    safe = client.post("/api/destinations", json={"fen": PINNED, "square": "e2", "safe": True}).json()
    assert safe["destinations"] == ["e8", "e7", "e6", "e5", "e4", "e3"]


def test_destinations_errors() -> None:
    client = _client()
    r = client.post("/api/destinations", json={"fen": START, "square": "e4"})
    assert r.status_code == 400
    assert "no piece" in r.json()["error"]["message"]
    r = client.post("/api/destinations", json={"fen": START, "square": "z9"})
    assert r.status_code == 400


def test_ai_move_uses_default_difficulty() -> None:
    client = _client(Settings(default_difficulty=Difficulty.HARD))
    r = client.post("/api/ai-move", json={"fen": "7k/8/8/8/8/8/8/K7"})
    assert r.status_code == 200
    body = r.json()
    assert body["move"] == "h8g7"
    assert body["difficulty"] == "hard"
    assert body["candidates"] == 3
    assert body["score"] is not None


def test_ai_move_medium_captures_queen() -> None:
    r = _client().post(
        "/api/ai-move", json={"fen": "k7/p7/PQ6/P7/8/7p/8/7K", "difficulty": "medium"}
    )
    assert r.json()["move"] == "a7b6"


def test_ai_move_none_when_black_is_stuck() -> None:
    r = _client().post("/api/ai-move", json={"fen": STALEMATE, "difficulty": "easy"})
    assert r.status_code == 200
    body = r.json()
    assert body["move"] is None
    assert body["candidates"] == 0
