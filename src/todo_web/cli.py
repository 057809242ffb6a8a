"""
Command-line entry point for the todo server.

Usage:
    todo-web --port 9004 --db-dir ./data
    python -m todo_web

TODO_WEB_PORT and TODO_WEB_DB_DIR override the corresponding flags.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from .errors import StorageError
from .log import configure_logging
from .main import create_app
from .settings import DEFAULT_DB_DIR, DEFAULT_PORT, get_settings
from .store import TodoStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo-web", description="Serve the todo list web application.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"HTTP server port (default: {DEFAULT_PORT})")
    parser.add_argument(
        "--db-dir",
        default=DEFAULT_DB_DIR,
        help="directory for the database file (default: current directory)",
    )
    return parser


# PUBLIC_INTERFACE
def main(argv: Optional[List[str]] = None) -> int:
    """Parse flags, open the store and serve until interrupted."""
    args = build_parser().parse_args(argv)
    settings = get_settings(port=args.port, db_dir=args.db_dir)
    configure_logging(settings.log_level)

    try:
        store = TodoStore.initialize(settings.db_path)
    except StorageError as exc:
        logger.error("Failed to initialize database: %s", exc)
        return 1

    app = create_app(settings=settings, store=store)
    logger.info("Starting todo server on http://localhost:%d", settings.port)
    try:
        uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
