from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...engine.game import Game


class InMemorySessionStore:
    """Thread-safe in-memory store of running games, keyed by ``game_id``.

    Nothing survives a restart; saving games is left to the client.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Store ``game`` (or a fresh player-vs-player game) and return its id."""
        gid = str(uuid.uuid4())
        if game is None:
            game = Game.new()
        with self._lock:
            self._games[gid] = game
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None

    def locked(self) -> threading.RLock:
        """Lock to hold while mutating a stored game."""
        return self._lock
