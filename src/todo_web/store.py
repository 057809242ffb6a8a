from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from threading import RLock
from typing import Generator, List

from .errors import StorageError
from .models import Todo

logger = logging.getLogger(__name__)

MEMORY = ":memory:"
TITLE_MAX_LENGTH = 500


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    completed: str = "completed"
    created_at: str = "created_at"


_COLS = _Cols()

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {_COLS.table} (
    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
    {_COLS.title} VARCHAR({TITLE_MAX_LENGTH}) NOT NULL
        CHECK (length({_COLS.title}) <= {TITLE_MAX_LENGTH}),
    {_COLS.completed} BOOLEAN NOT NULL DEFAULT 0,
    {_COLS.created_at} TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


# PUBLIC_INTERFACE
class TodoStore:
    """
    SQLite-backed store owning the ``todos`` schema and its CRUD statements.

    One connection is shared by every request thread. Each operation is a
    single statement committed on its own; the lock only serializes access to
    the connection object and adds no ordering between requests.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._lock = RLock()

    @classmethod
    def initialize(cls, path: str) -> "TodoStore":
        """
        Open (creating if needed) the database at ``path`` and ensure the
        schema exists. Calling it against an existing database is harmless.

        Raises:
            StorageError: if the file cannot be opened or the table created.
        """
        try:
            if path != MEMORY:
                os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            conn = sqlite3.connect(path, check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"opening database: {exc}") from exc

        conn.row_factory = sqlite3.Row
        try:
            with conn:
                conn.execute(_SCHEMA)
        except sqlite3.Error as exc:
            conn.close()
            raise StorageError(f"creating table: {exc}") from exc

        logger.info("Opened todo store at %s", path)
        return cls(conn)

    @contextmanager
    def _cursor(self) -> Generator[sqlite3.Connection, None, None]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc

    def _row_to_todo(self, row: sqlite3.Row) -> Todo:
        return Todo(
            id=int(row[_COLS.id]),
            title=str(row[_COLS.title]),
            completed=bool(row[_COLS.completed]),
            created_at=datetime.fromisoformat(row[_COLS.created_at]),
        )

    def list(self) -> List[Todo]:
        """Return every todo ordered by ascending id. An empty list means no todos yet."""
        with self._cursor() as conn:
            rows = conn.execute(
                f"""
                SELECT {_COLS.id}, {_COLS.title}, {_COLS.completed}, {_COLS.created_at}
                FROM {_COLS.table}
                ORDER BY {_COLS.id}
                """
            ).fetchall()
        return [self._row_to_todo(r) for r in rows]

    def create(self, title: str) -> None:
        """Insert a new, not yet completed todo. Callers reject empty titles."""
        with self._cursor() as conn:
            conn.execute(f"INSERT INTO {_COLS.table} ({_COLS.title}) VALUES (?)", (title,))

    def toggle(self, todo_id: int) -> None:
        """Flip ``completed`` for the matching row; an unknown id changes nothing."""
        with self._cursor() as conn:
            conn.execute(
                f"UPDATE {_COLS.table} SET {_COLS.completed} = NOT {_COLS.completed} WHERE {_COLS.id} = ?",
                (todo_id,),
            )

    def delete(self, todo_id: int) -> None:
        """Remove the matching row; an unknown id changes nothing."""
        with self._cursor() as conn:
            conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))

    def close(self) -> None:
        with self._lock:
            self._conn.close()


# PUBLIC_INTERFACE
def initialize(path: str) -> TodoStore:
    """Open the todo store at ``path``. See :meth:`TodoStore.initialize`."""
    return TodoStore.initialize(path)
