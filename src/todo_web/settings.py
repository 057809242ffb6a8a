from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_PORT = 9004
DEFAULT_DB_DIR = "."
DB_FILENAME = "todos.db"


@dataclass(frozen=True)
class Settings:
    """
    Application settings. Command-line flags provide the base values and
    environment variables override them.

    Env vars:
    - TODO_WEB_PORT: HTTP port (default 9004); ignored unless it is an integer
    - TODO_WEB_DB_DIR: directory holding todos.db (default: current directory)
    - TODO_WEB_APP_NAME: page title (default 'Todo List')
    - TODO_WEB_LOG_LEVEL: logging level name (default 'INFO')
    """

    port: int = DEFAULT_PORT
    db_dir: str = DEFAULT_DB_DIR
    app_name: str = "Todo List"
    log_level: str = "INFO"

    @property
    def db_path(self) -> str:
        return os.path.join(self.db_dir, DB_FILENAME)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_port(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


# PUBLIC_INTERFACE
def get_settings(port: Optional[int] = None, db_dir: Optional[str] = None) -> Settings:
    """Return settings built from flag values with environment overrides applied."""
    base_port = DEFAULT_PORT if port is None else port
    base_dir = DEFAULT_DB_DIR if db_dir is None else db_dir

    return Settings(
        port=_parse_port(_get_env("TODO_WEB_PORT", str(base_port)), base_port),
        db_dir=_get_env("TODO_WEB_DB_DIR", base_dir),
        app_name=_get_env("TODO_WEB_APP_NAME", "Todo List"),
        log_level=_get_env("TODO_WEB_LOG_LEVEL", "INFO").strip().upper(),
    )
