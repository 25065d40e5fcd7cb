from __future__ import annotations

import argparse
from dataclasses import replace
from typing import List, Optional

import uvicorn

from chessmaster.config import LOG_LEVELS, Settings
from chessmaster.protocol.http.app import create_app
from chessmaster.search.service import Difficulty


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the Chess Master engine over HTTP")
    parser.add_argument("--host", type=str, default=defaults.host, help="Bind address")
    parser.add_argument("--port", type=int, default=defaults.port, help="Bind port")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=defaults.log_level,
        help="Logging level",
    )
    parser.add_argument(
        "--difficulty",
        type=Difficulty.parse,
        default=defaults.default_difficulty,
        help="Opponent strength when a request does not name one (easy|medium|hard)",
    )
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> Settings:
    """Environment settings overridden by command-line flags."""
    env = Settings.from_env()
    args = build_parser(env).parse_args(argv)
    return replace(
        env,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        default_difficulty=args.difficulty,
    )


def main(argv: Optional[List[str]] = None) -> None:
    settings = parse_settings(argv)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
