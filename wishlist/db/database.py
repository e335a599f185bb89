"""Core database connection guarded by a single lock.

All access to the store goes through one ``sqlite3`` connection and one
``threading.Lock``.  Each public method holds the lock for its entire run,
including materialising result rows, so every repository operation is
atomic with respect to every other one.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from wishlist.db.errors import ConstraintViolation, StoreFault
from wishlist.db.schema import SCHEMA_DDL

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


class Database:
    """
    SQLite database wrapper with whole-operation mutual exclusion.

    ``guard()`` is the critical section: it yields the shared connection while
    holding the lock and translates ``sqlite3`` errors into the store's own
    exceptions.  ``transaction()`` adds commit/rollback on top of it.
    """

    def __init__(self, path: Optional[Path | str] = None):
        from wishlist.config import get_db_path
        if path is None:
            self.path: Path = get_db_path()
        elif isinstance(path, str):
            self.path = Path(path)
        else:
            self.path = path
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self._closed = False

    # -- connection lifecycle --------------------------------------------------

    def _is_memory(self) -> bool:
        return str(self.path) == MEMORY

    def _ensure_dir(self) -> None:
        if not self._is_memory():
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _connection(self) -> sqlite3.Connection:
        # Caller must hold self._lock.
        if self._closed:
            raise StoreFault(f"database {self.path} is closed")
        if self._conn is None:
            self._ensure_dir()
            conn = sqlite3.connect(str(self.path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            if not self._is_memory():
                conn.execute("PRAGMA journal_mode = WAL")
            self._conn = conn
            logger.debug(f"Opened database at {self.path}")
        return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug(f"Closed database at {self.path}")
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def init(self) -> None:
        """Create all tables (idempotent)."""
        with self.guard() as conn:
            conn.executescript(SCHEMA_DDL)
            conn.commit()
        logger.debug(f"Schema ensured at {self.path}")

    # -- critical section ------------------------------------------------------

    @contextmanager
    def guard(self) -> Generator[sqlite3.Connection, None, None]:
        """Exclusive access to the connection for the duration of the block."""
        with self._lock:
            try:
                yield self._connection()
            except sqlite3.IntegrityError as exc:
                raise ConstraintViolation(str(exc)) from exc
            except sqlite3.Error as exc:
                raise StoreFault(str(exc)) from exc

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Guarded write: commits on success, rolls back on exception."""
        with self.guard() as conn:
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    # -- low-level query helpers -----------------------------------------------

    def execute(self, sql: str, params: tuple = ()) -> int:
        """Run one write statement and return the number of affected rows."""
        with self.transaction() as conn:
            cursor = conn.execute(sql, params)
            return cursor.rowcount

    def insert(self, sql: str, params: tuple = ()) -> int:
        """Run one ``INSERT`` and return the generated row id."""
        with self.transaction() as conn:
            cursor = conn.execute(sql, params)
            return cursor.lastrowid

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        with self.guard() as conn:
            row = conn.execute(sql, params).fetchone()
            return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        with self.guard() as conn:
            rows = conn.execute(sql, params).fetchall()
            return [dict(r) for r in rows]
