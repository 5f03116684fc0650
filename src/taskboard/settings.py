from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

# Values already present in the environment win over .env
load_dotenv(override=False)


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables (and an optional .env file).

    Env vars:
    - PORT: listen port for the API server (required by ``taskboard.main.run``)
    - HOST: listen address. Default '0.0.0.0'
    - PERSISTENCE_BACKEND: 'sqlite' (default) or 'memory'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/tasks.db'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level name. Default 'INFO'
    - TASKS_API_URL: base URL the UI client talks to. Default 'http://localhost:3000'
    """

    port: Optional[int]
    host: str
    persistence_backend: str
    sqlite_db_path: str
    cors_allow_origins: List[str]
    log_level: str
    api_url: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_port(value: Optional[str]) -> Optional[int]:
    """Return the port as int, None when unset. Non-numeric values raise ValueError."""
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"PORT must be an integer, got {value!r}") from e


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "sqlite").strip().lower()
    if backend not in {"memory", "sqlite"}:
        raise ValueError(f"PERSISTENCE_BACKEND must be 'memory' or 'sqlite', got {backend!r}")

    return Settings(
        port=_parse_port(os.getenv("PORT")),
        host=_get_env("HOST", "0.0.0.0").strip(),
        persistence_backend=backend,
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/tasks.db").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        api_url=_get_env("TASKS_API_URL", "http://localhost:3000").strip().rstrip("/"),
    )
