"""Configuration for Dungeon."""

import os
from dataclasses import dataclass
from pathlib import Path

from .engine.state import LAMP_BUDGET


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./dungeon.db"
    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_fingerprints: bool = True
    lamp_budget: int = LAMP_BUDGET
    seed: int | None = None  # fixes every game's dice when set

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from DUNGEON_* environment variables."""
        certfile = os.getenv("DUNGEON_CERTFILE")
        keyfile = os.getenv("DUNGEON_KEYFILE")
        log_file = os.getenv("DUNGEON_LOG_FILE")
        seed = os.getenv("DUNGEON_SEED")

        return cls(
            database_url=os.getenv("DUNGEON_DATABASE_URL", cls.database_url),
            host=os.getenv("DUNGEON_HOST", cls.host),
            port=int(os.getenv("DUNGEON_PORT", str(cls.port))),
            certfile=Path(certfile) if certfile else None,
            keyfile=Path(keyfile) if keyfile else None,
            log_level=os.getenv("DUNGEON_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_flag("DUNGEON_JSON_LOGS", False),
            hash_fingerprints=_flag("DUNGEON_HASH_FINGERPRINTS", True),
            lamp_budget=int(os.getenv("DUNGEON_LAMP_BUDGET", str(cls.lamp_budget))),
            seed=int(seed) if seed else None,
        )
