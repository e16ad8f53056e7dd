"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    """Application configuration. All values sourced from environment variables."""

    # Required
    database_path: str

    # Optional — Storage
    database_seed_path: str | None = None

    # Optional — Web
    web_host: str = "0.0.0.0"
    web_port: int = 8080

    # Optional — Application
    log_level: str = "INFO"
    log_format: str = "json"
    app_env: str = "production"


def load_config(env_path: str | Path | None = None) -> Config:
    """Load configuration from environment variables.

    Loads a .env file if present (for local development), then validates
    that DATABASE_PATH is set. Raises ValueError if it is missing or if
    WEB_PORT is not an integer.
    """
    load_dotenv(dotenv_path=env_path)

    if not os.environ.get("DATABASE_PATH"):
        raise ValueError("Missing required environment variable: DATABASE_PATH")

    raw_port = os.environ.get("WEB_PORT", "8080")
    try:
        web_port = int(raw_port)
    except ValueError:
        raise ValueError(f"WEB_PORT must be an integer, got {raw_port!r}") from None

    return Config(
        # Required
        database_path=os.environ["DATABASE_PATH"],
        # Optional — Storage
        database_seed_path=os.environ.get("DATABASE_SEED_PATH") or None,
        # Optional — Web
        web_host=os.environ.get("WEB_HOST", "0.0.0.0"),
        web_port=web_port,
        # Optional — Application
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_format=os.environ.get("LOG_FORMAT", "json"),
        app_env=os.environ.get("APP_ENV", "production"),
    )
