"""PostgreSQL implementation of the Database protocol.

Uses asyncpg for async access. All application SQL uses ``?`` placeholders
and SQLite-flavored ``INSERT OR IGNORE``; this backend translates both at
execute time.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import asyncpg

from public_diary.errors import StorageError

if TYPE_CHECKING:
    from public_diary.db.backend import Cursor, Row

logger = logging.getLogger(__name__)

# Pre-compiled regexes for SQL translation
_PLACEHOLDER_RE = re.compile(r"\?")
_INSERT_OR_IGNORE_RE = re.compile(r"^\s*INSERT\s+OR\s+IGNORE\s+INTO", re.IGNORECASE)


def _translate_placeholders(sql: str) -> str:
    """Convert ``?`` placeholders to ``$1, $2, ...`` for asyncpg."""
    counter = 0

    def _replace(_match: re.Match[str]) -> str:
        nonlocal counter
        counter += 1
        return f"${counter}"

    return _PLACEHOLDER_RE.sub(_replace, sql)


def _translate_sql(sql: str) -> str:
    """Translate SQLite-flavored application SQL to PostgreSQL."""
    if _INSERT_OR_IGNORE_RE.match(sql):
        sql = _INSERT_OR_IGNORE_RE.sub("INSERT INTO", sql, count=1).rstrip().rstrip(";")
        sql += " ON CONFLICT DO NOTHING"
    return _translate_placeholders(sql)


class PostgresRow:
    """Wraps asyncpg.Record to satisfy the Row protocol."""

    def __init__(self, record: asyncpg.Record) -> None:
        """Initialize with an asyncpg Record."""
        self._record = record

    def __getitem__(self, key: str | int) -> Any:
        """Get a column value by name or position."""
        return self._record[key]

    def keys(self) -> list[str]:
        """Return column names."""
        return list(self._record.keys())


class PostgresCursor:
    """Wraps a list of asyncpg.Record as a Cursor.

    asyncpg returns results eagerly; there's no server-side cursor for
    simple queries. This wraps the result list to match the Cursor protocol.
    """

    def __init__(self, rows: list[asyncpg.Record], status: str | None = None) -> None:
        """Initialize with result rows and optional status string."""
        self._rows = rows
        self._index = 0
        self._rowcount = self._parse_rowcount(status)

    @property
    def rowcount(self) -> int:
        """Number of rows affected by the last operation."""
        return self._rowcount

    async def fetchone(self) -> Row | None:
        """Fetch the next row, or None if exhausted."""
        if self._index >= len(self._rows):
            return None
        row = PostgresRow(self._rows[self._index])
        self._index += 1
        return row

    async def fetchall(self) -> list[Row]:
        """Fetch all remaining rows."""
        remaining: list[Row] = [PostgresRow(r) for r in self._rows[self._index :]]
        self._index = len(self._rows)
        return remaining

    @staticmethod
    def _parse_rowcount(status: str | None) -> int:
        """Parse affected row count from asyncpg status string.

        Examples: "INSERT 0 1" → 1, "UPDATE 3" → 3, "INSERT 0 0" → 0.
        """
        if not status:
            return -1
        parts = status.split()
        if len(parts) >= 2:
            try:
                return int(parts[-1])
            except ValueError:
                pass
        return -1


SCHEMA_STATEMENTS = [
    """CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS diary_entries (
        date TEXT PRIMARY KEY,
        content TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )""",
    "CREATE INDEX IF NOT EXISTS idx_entries_date_desc ON diary_entries(date DESC)",
    """CREATE TABLE IF NOT EXISTS diary_versions (
        id SERIAL PRIMARY KEY,
        entry_date TEXT NOT NULL,
        content TEXT NOT NULL,
        version_number INTEGER NOT NULL CHECK (version_number >= 1),
        created_at TEXT NOT NULL
    )""",
    "CREATE UNIQUE INDEX IF NOT EXISTS uq_versions_entry_number"
    " ON diary_versions(entry_date, version_number)",
    "CREATE INDEX IF NOT EXISTS idx_versions_entry_date"
    " ON diary_versions(entry_date, version_number DESC)",
    """CREATE TABLE IF NOT EXISTS rate_limits (
        client_key TEXT PRIMARY KEY,
        request_count INTEGER NOT NULL,
        window_started_at TEXT NOT NULL
    )""",
]


class PostgresBackend:
    """PostgreSQL implementation of the Database protocol.

    Each ``execute()`` call acquires a connection from the pool, translates
    the SQL, and releases the connection after. ``commit()`` is a no-op:
    asyncpg auto-commits each statement.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        """Initialize with an asyncpg connection pool."""
        self._pool = pool

    @classmethod
    async def create(cls, url: str) -> PostgresBackend:
        """Create a PostgresBackend from a connection URL."""
        try:
            pool = await asyncpg.create_pool(url, min_size=2, max_size=10)
        except (asyncpg.PostgresError, OSError) as e:
            raise StorageError(f"Could not connect to PostgreSQL: {e}") from e
        return cls(pool)

    async def execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> Cursor:
        """Execute a single SQL statement and return a cursor."""
        pg_sql = _translate_sql(sql)
        try:
            async with self._pool.acquire() as conn:
                stmt = await conn.prepare(pg_sql)
                if stmt.get_attributes():
                    # Query returns rows
                    rows = await conn.fetch(pg_sql, *params)
                    return PostgresCursor(rows)
                # DML returns a status string
                status = await conn.execute(pg_sql, *params)
                return PostgresCursor([], status=status)
        except (asyncpg.PostgresError, OSError) as e:
            logger.warning("PostgreSQL statement failed: %s", e)
            raise StorageError(f"PostgreSQL statement failed: {e}") from e

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements."""
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(sql)
        except (asyncpg.PostgresError, OSError) as e:
            raise StorageError(f"PostgreSQL script failed: {e}") from e

    async def commit(self) -> None:
        """No-op: asyncpg auto-commits each statement."""

    async def rollback(self) -> None:
        """No-op: a failed statement never leaves a transaction open."""

    async def close(self) -> None:
        """Close the connection pool."""
        await self._pool.close()

    async def apply_schema(self) -> None:
        """Apply all PostgreSQL DDL."""
        try:
            async with self._pool.acquire() as conn:
                for statement in SCHEMA_STATEMENTS:
                    await conn.execute(statement)
                row = await conn.fetchrow("SELECT version FROM schema_version")
                if row is None:
                    from public_diary.db.schema import SCHEMA_VERSION

                    await conn.execute(
                        "INSERT INTO schema_version (version) VALUES ($1)", SCHEMA_VERSION
                    )
        except (asyncpg.PostgresError, OSError) as e:
            raise StorageError(f"PostgreSQL schema setup failed: {e}") from e
