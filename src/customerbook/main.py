"""Application entry point — prepares the database and runs the web server."""

from __future__ import annotations

import json
import logging
import sys

import uvicorn

from customerbook.config import Config, load_config
from customerbook.storage import init_db, prepare_database
from customerbook.web.app import create_app

logger = logging.getLogger("customerbook")


def _setup_logging(log_level: str, log_format: str) -> None:
    """Configure root logger based on config."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(
            json.dumps(
                {
                    "time": "%(asctime)s",
                    "level": "%(levelname)s",
                    "logger": "%(name)s",
                    "message": "%(message)s",
                }
            )
        )
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def bootstrap(config: Config) -> None:
    """Copy the seed database if configured, then ensure the schema exists."""
    prepare_database(config.database_seed_path, config.database_path)
    init_db(config.database_path)


def main() -> None:
    """Load config, set up logging, prepare the database, and run via uvicorn."""
    config = load_config()

    _setup_logging(config.log_level, config.log_format)

    logger.info(
        "Customerbook starting (env=%s, db=%s)",
        config.app_env,
        config.database_path,
    )

    bootstrap(config)

    app = create_app(config)
    uvicorn.run(app, host=config.web_host, port=config.web_port)


if __name__ == "__main__":
    main()
