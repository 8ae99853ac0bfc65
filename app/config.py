"""Runtime settings read from the environment."""
from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    max_players_per_room: int = 2
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            max_players_per_room=int(os.environ.get("VIPER_DUEL_MAX_PLAYERS", "2")),
            log_level=os.environ.get("VIPER_DUEL_LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
