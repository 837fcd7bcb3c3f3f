"""Application entry point — opens both stores and serves the command boundary."""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn

from deskstore.commands import Stores
from deskstore.config import Config, load_config
from deskstore.errors import StoreError
from deskstore.storage import open_inventory_db, open_notes_db
from deskstore.web.app import create_app

logger = logging.getLogger("deskstore")


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


def open_stores(config: Config) -> Stores:
    """Open and bootstrap both stores. Raises StoreError if either fails."""
    notes_db = open_notes_db(config.notes_database_path, wal=config.database_wal)
    try:
        inventory_db = open_inventory_db(config.inventory_database_path, wal=config.database_wal)
    except StoreError:
        notes_db.close()
        raise
    return Stores(notes=notes_db, inventory=inventory_db)


def main() -> None:
    """Load config, set up logging, bootstrap the stores, and serve."""
    config = load_config()

    _setup_logging(config.log_level, config.log_format)

    logger.info(
        "deskstore starting (env=%s, notes=%s, inventory=%s)",
        config.app_env,
        config.notes_database_path,
        config.inventory_database_path,
    )

    try:
        stores = open_stores(config)
    except StoreError as exc:
        logger.critical("Storage bootstrap failed: %s", exc.message)
        sys.exit(1)

    @asynccontextmanager
    async def lifespan(app):
        yield
        logger.info("Closing stores")
        stores.close()

    app = create_app(stores, lifespan=lifespan)

    uvicorn.run(app, host=config.web_host, port=config.web_port)


if __name__ == "__main__":
    main()
