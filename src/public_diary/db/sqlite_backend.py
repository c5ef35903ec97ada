"""SQLite implementation of the Database protocol.

Thin wrapper around aiosqlite.Connection; no SQL translation needed
since application code already uses SQLite-flavored SQL.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING, Any

from public_diary.errors import StorageError

if TYPE_CHECKING:
    import aiosqlite

    from public_diary.db.backend import Cursor, Row

logger = logging.getLogger(__name__)


class SQLiteCursor:
    """Wraps aiosqlite.Cursor to satisfy the Cursor protocol."""

    def __init__(self, cursor: aiosqlite.Cursor) -> None:
        """Initialize with an aiosqlite cursor."""
        self._cursor = cursor

    @property
    def rowcount(self) -> int:
        """Number of rows affected by the last operation."""
        rc = self._cursor.rowcount
        return rc if rc is not None else -1

    async def fetchone(self) -> Row | None:
        """Fetch the next row, or None if exhausted."""
        try:
            return await self._cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"SQLite fetch failed: {e}") from e

    async def fetchall(self) -> list[Row]:
        """Fetch all remaining rows."""
        try:
            return list(await self._cursor.fetchall())
        except sqlite3.Error as e:
            raise StorageError(f"SQLite fetch failed: {e}") from e


class SQLiteBackend:
    """SQLite implementation of the Database protocol.

    Passes all calls through to the underlying aiosqlite.Connection and
    turns sqlite3 errors into StorageError. The raw connection is exposed
    as ``_conn`` for PRAGMA work during connection setup.
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        """Initialize with an aiosqlite connection."""
        self._conn = conn

    async def execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        try:
            cursor = await self._conn.execute(sql, params)
        except sqlite3.Error as e:
            logger.warning("SQLite statement failed: %s", e)
            raise StorageError(f"SQLite statement failed: {e}") from e
        return SQLiteCursor(cursor)

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements (DDL)."""
        try:
            await self._conn.executescript(sql)
        except sqlite3.Error as e:
            raise StorageError(f"SQLite script failed: {e}") from e

    async def commit(self) -> None:
        """Commit the current transaction."""
        try:
            await self._conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"SQLite commit failed: {e}") from e

    async def rollback(self) -> None:
        """Roll back the implicit transaction left open by a failed write."""
        try:
            await self._conn.rollback()
        except sqlite3.Error as e:
            raise StorageError(f"SQLite rollback failed: {e}") from e

    async def close(self) -> None:
        """Close the database connection."""
        await self._conn.close()

    async def apply_schema(self) -> None:
        """Apply the SQLite DDL."""
        from public_diary.db.schema import apply_schema

        await apply_schema(self)
