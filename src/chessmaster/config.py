from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from chessmaster.search.service import Difficulty


ENV_PREFIX = "CHESSMASTER_"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Server settings, read from ``CHESSMASTER_*`` environment variables."""

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    default_difficulty: Difficulty = Difficulty.MEDIUM

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment, falling back to defaults.

        Raises:
            ValueError: If a variable holds an invalid port, log level or
                difficulty.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        port_raw = env.get(ENV_PREFIX + "PORT")
        port = defaults.port
        if port_raw:
            try:
                port = int(port_raw)
            except ValueError as e:
                raise ValueError(f"invalid {ENV_PREFIX}PORT: {port_raw!r}") from e
            if not 0 < port < 65536:
                raise ValueError(f"invalid {ENV_PREFIX}PORT: {port_raw!r}")

        log_level = env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"invalid {ENV_PREFIX}LOG_LEVEL: {log_level!r}")

        difficulty = defaults.default_difficulty
        difficulty_raw = env.get(ENV_PREFIX + "DEFAULT_DIFFICULTY")
        if difficulty_raw:
            difficulty = Difficulty.parse(difficulty_raw)

        return cls(
            host=env.get(ENV_PREFIX + "HOST", defaults.host),
            port=port,
            log_level=log_level,
            default_difficulty=difficulty,
        )
