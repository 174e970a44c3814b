"""Application settings read from the environment (and a .env file)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_bool(env_name: str, default: bool = False) -> bool:
    val = os.getenv(env_name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class Settings:
    database_url: str = "sqlite:///data/orders.db"
    database_echo: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            database_echo=_get_bool("DATABASE_ECHO", cls.database_echo),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )


settings = Settings.from_env()
