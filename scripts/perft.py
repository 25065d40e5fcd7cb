#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo's src/ to sys.path.
SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chessmaster.engine.board import STARTPOS_FEN
from chessmaster.engine.game import Game
from chessmaster.engine.perft import divide, perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Count positions reachable under the engine's rules")
    parser.add_argument(
        "--fen", type=str, default=f"{STARTPOS_FEN} w", help="FEN string (default: startpos)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument("--divide", action="store_true", help="Print counts per root move")
    args = parser.parse_args()

    game = Game.from_fen(args.fen)
    start = time.perf_counter()
    if args.divide:
        counts = divide(game.board, game.side_to_move, args.depth)
        for uci, n in sorted(counts.items()):
            print(f"{uci}: {n}")
        nodes = sum(counts.values())
    else:
        nodes = perft(game.board, game.side_to_move, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
