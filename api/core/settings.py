"""
Environment-driven settings.

Values are read on every call so tests can monkeypatch the environment.
A `.env` file in the working directory is loaded once by `load_env()`;
variables already set in the shell win.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def load_env() -> None:
    load_dotenv(override=False)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def host() -> str:
    return os.environ.get("HOST", DEFAULT_HOST).strip() or DEFAULT_HOST


def log_level() -> str:
    return (os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO").upper()


def db_pool_max_size() -> int:
    size = _env_int("DB_POOL_MAX_SIZE", 5)
    return size if size > 0 else 5


def db_command_timeout_s() -> float:
    timeout = _env_float("DB_COMMAND_TIMEOUT_S", 30.0)
    return timeout if timeout > 0 else 30.0


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
