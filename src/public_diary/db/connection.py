"""Database connection management."""

import logging
import sqlite3
from pathlib import Path

import aiosqlite

from public_diary.config import get_database_url, get_db_path
from public_diary.db.backend import Database
from public_diary.db.sqlite_backend import SQLiteBackend
from public_diary.errors import StorageError

logger = logging.getLogger(__name__)


async def create_connection(db_path: Path | str | None = None) -> Database:
    """Create and initialize a database connection.

    Dispatches to SQLite or PostgreSQL based on DIARY_DATABASE_URL.
    For in-memory SQLite databases, pass ":memory:".
    """
    # Explicit ":memory:" always uses SQLite (used by tests)
    if db_path == ":memory:":
        return await _create_sqlite(":memory:")
    url = get_database_url()
    if url and url.startswith("postgres"):
        return await _create_postgres(url)
    return await _create_sqlite(db_path or get_db_path())


async def _create_sqlite(db_path: Path | str) -> Database:
    """Create a SQLite backend and apply the schema."""
    db_path = str(db_path)

    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = await aiosqlite.connect(db_path)
        conn.row_factory = aiosqlite.Row
        # WAL lets readers proceed while a writer holds the lock
        await conn.execute("PRAGMA journal_mode=WAL")
    except sqlite3.Error as e:
        raise StorageError(f"Could not open SQLite database at {db_path}: {e}") from e
    logger.debug("SQLite database opened at %s", db_path)

    db = SQLiteBackend(conn)
    await db.apply_schema()
    return db


async def _create_postgres(url: str) -> Database:
    """Create a PostgreSQL backend and apply the schema."""
    from public_diary.db.postgres_backend import PostgresBackend

    db = await PostgresBackend.create(url)
    await db.apply_schema()
    return db
