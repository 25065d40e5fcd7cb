from __future__ import annotations

import threading

from chessmaster.engine.game import Game, GameMode
from chessmaster.engine.piece import Color
from chessmaster.protocol.http.session import InMemorySessionStore


def test_create_get_delete() -> None:
    store = InMemorySessionStore()
    gid = store.create()
    game = store.get(gid)
    assert game is not None and game.mode is GameMode.PVP
    assert store.delete(gid) is True
    assert store.get(gid) is None
    assert store.delete(gid) is False


def test_create_keeps_given_game() -> None:
    store = InMemorySessionStore()
    game = Game.new(GameMode.AI_HARD)
    assert store.get(store.create(game)) is game


def test_concurrent_creates_get_distinct_ids() -> None:
    store = InMemorySessionStore()
    ids: list[str] = []

    def worker() -> None:
        for _ in range(20):
            ids.append(store.create())

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(set(ids)) == 80
    assert all(store.get(i) is not None for i in ids)


def test_lock_is_reentrant() -> None:
    store = InMemorySessionStore()
    gid = store.create()
    with store.locked():
        game = store.get(gid)
        assert game is not None and game.side_to_move is Color.WHITE
