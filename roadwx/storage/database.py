"""SQLite connection for the snapshot cache, with WAL mode and schema migrations."""

import importlib
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_PACKAGE = "roadwx.storage.migrations"
MIGRATIONS_DIR = Path(__file__).parent / "migrations"

# Seconds to wait on a locked database before giving up; two CLI runs may
# share one cache file.
BUSY_TIMEOUT_SECONDS = 5.0


def connect(db_path: str | Path, timeout: float = BUSY_TIMEOUT_SECONDS) -> sqlite3.Connection:
    """Open a SQLite connection in WAL mode with name-addressable rows."""
    conn = sqlite3.connect(str(db_path), timeout=timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def applied_migrations(conn: sqlite3.Connection) -> set[str]:
    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_versions ("
        "  version TEXT PRIMARY KEY,"
        "  applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP"
        ")"
    )
    conn.commit()
    return {row[0] for row in conn.execute("SELECT version FROM schema_versions")}


def run_migrations(conn: sqlite3.Connection) -> list[str]:
    """Apply pending migrations in name order. Returns the names applied."""
    done = applied_migrations(conn)
    newly_applied = []
    for name in discover_migrations():
        if name in done:
            continue
        mod = importlib.import_module(f"{MIGRATIONS_PACKAGE}.{name}")
        mod.up(conn)
        conn.execute("INSERT INTO schema_versions (version) VALUES (?)", (name,))
        conn.commit()
        logger.debug("Applied migration %s", name)
        newly_applied.append(name)
    return newly_applied


def discover_migrations() -> list[str]:
    """Migration module names (v###_*.py), sorted."""
    return sorted(p.stem for p in MIGRATIONS_DIR.glob("v[0-9]*_*.py"))
