"""Key-value storage backends for the snapshot cache."""

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

from roadwx.ingest.errors import RoadwxError
from roadwx.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)


class StorageUnavailable(RoadwxError):
    """The backing store cannot be opened or written."""


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def close(self) -> None: ...


class MemoryStore:
    """Dict-backed store; used in tests and with --no-cache runs."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def close(self) -> None:
        pass


class SqliteStore:
    """Persistent store in a single SQLite table, opened lazily."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            conn: sqlite3.Connection | None = None
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = connect(self.db_path)
                run_migrations(conn)
            except (sqlite3.Error, OSError) as e:
                if conn is not None:
                    conn.close()
                raise StorageUnavailable(f"Cannot open {self.db_path}: {e}") from e
            self._conn = conn
        return self._conn

    def get_item(self, key: str) -> str | None:
        row = self._connection().execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return row[0]

    def set_item(self, key: str, value: str) -> None:
        conn = self._connection()
        conn.execute(
            "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
            "updated_at = CURRENT_TIMESTAMP",
            (key, value),
        )
        conn.commit()

    def remove_item(self, key: str) -> None:
        conn = self._connection()
        conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        conn.commit()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
