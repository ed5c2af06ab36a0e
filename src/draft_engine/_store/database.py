# Area: Store
"""
draft_engine._store.database — Database and Transactions
========================================================

Handles SQLite database initialization, connection management and the
write transaction every state-changing operation runs in.

``BEGIN IMMEDIATE`` takes the database write lock before anything is
read, so all preconditions checked inside a transaction see the state
left by the previous committer. Concurrent writers queue on the lock
for up to ``busy_timeout`` seconds.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from ..errors import StoreFailure

logger = logging.getLogger("draft_engine.store.database")

# Path to schema file
SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_BUSY_TIMEOUT_SECONDS = 10.0


def get_connection(
    db_path: str = "draft_engine.db",
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT_SECONDS,
) -> sqlite3.Connection:
    """
    Get a database connection.

    The connection runs in autocommit mode; transactions are opened
    explicitly by ``transaction()``.

    Args:
        db_path: Path to the SQLite database file
        busy_timeout: Seconds to wait for the write lock

    Returns:
        SQLite connection with row factory and foreign keys enabled
    """
    conn = sqlite3.connect(db_path, timeout=busy_timeout, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_database(db_path: str = "draft_engine.db") -> None:
    """
    Initialize the database with schema.

    Args:
        db_path: Path to the SQLite database file

    Raises:
        StoreFailure: If the schema cannot be applied
    """
    try:
        conn = get_connection(db_path)
        try:
            conn.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))
        finally:
            conn.close()
    except sqlite3.Error as e:
        raise StoreFailure("init_database", e) from e
    logger.info("Database initialized at %s", db_path)


@contextmanager
def transaction(
    db_path: str,
    operation: str,
    draft_id: Optional[int] = None,
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT_SECONDS,
    write: bool = True,
) -> Iterator[sqlite3.Connection]:
    """
    Run a block inside one database transaction.

    Commits on success and rolls back on any exception. Driver errors are
    wrapped in StoreFailure; other exceptions propagate unchanged.

    Args:
        db_path: Path to the SQLite database file
        operation: Name of the calling operation, for error reports
        draft_id: Draft the operation is scoped to, for error reports
        busy_timeout: Seconds to wait for the write lock
        write: Take the write lock up front (BEGIN IMMEDIATE)
    """
    try:
        conn = get_connection(db_path, busy_timeout)
    except sqlite3.Error as e:
        raise StoreFailure(operation, e, draft_id) from e

    try:
        conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
        yield conn
        conn.execute("COMMIT")
    except sqlite3.Error as e:
        _rollback(conn)
        raise StoreFailure(operation, e, draft_id) from e
    except BaseException:
        _rollback(conn)
        raise
    finally:
        conn.close()


def _rollback(conn: sqlite3.Connection) -> None:
    if conn.in_transaction:
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error:
            logger.exception("Rollback failed")


def to_db_time(value: Optional[datetime]) -> Optional[str]:
    """Serialize a timestamp for storage."""
    return value.isoformat() if value is not None else None


class BaseRepository:
    """
    Base class for database repositories.

    Repositories operate on the connection of an open transaction so that
    everything a single operation reads and writes commits together.
    """

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize repository.

        Args:
            conn: Connection with an open transaction
        """
        self.conn = conn

    def _execute(self, query: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a statement and return its cursor."""
        return self.conn.execute(query, params)

    def _fetch_all(self, query: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """Execute query and return all rows as dicts."""
        return [dict(row) for row in self.conn.execute(query, params).fetchall()]

    def _fetch_one(self, query: str, params: tuple = ()) -> Optional[Dict[str, Any]]:
        """Execute query and return single result."""
        row = self.conn.execute(query, params).fetchone()
        return dict(row) if row is not None else None
