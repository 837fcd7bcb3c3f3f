"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    """Application configuration. All values sourced from environment variables."""

    # Storage
    notes_database_path: str = "notes.db"
    inventory_database_path: str = "inventory.db"
    database_wal: bool = True

    # Local HTTP boundary
    web_host: str = "127.0.0.1"
    web_port: int = 1420

    # Application
    log_level: str = "INFO"
    log_format: str = "text"
    app_env: str = "production"


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid integer for {name}: {raw!r}") from None


def load_config(env_path: str | Path | None = None) -> Config:
    """Load configuration from environment variables.

    Loads a .env file if present (for local development). Every variable is
    optional; malformed booleans or integers raise ValueError naming the
    offending variable.
    """
    load_dotenv(dotenv_path=env_path)

    log_format = os.environ.get("LOG_FORMAT", "text")
    if log_format not in ("text", "json"):
        raise ValueError(f"Invalid LOG_FORMAT: {log_format!r} (expected 'text' or 'json')")

    return Config(
        # Storage
        notes_database_path=os.environ.get("NOTES_DATABASE_PATH", "notes.db"),
        inventory_database_path=os.environ.get("INVENTORY_DATABASE_PATH", "inventory.db"),
        database_wal=_parse_bool("DATABASE_WAL", os.environ.get("DATABASE_WAL", "true")),
        # Local HTTP boundary
        web_host=os.environ.get("WEB_HOST", "127.0.0.1"),
        web_port=_parse_int("WEB_PORT", os.environ.get("WEB_PORT", "1420")),
        # Application
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_format=log_format,
        app_env=os.environ.get("APP_ENV", "production"),
    )
