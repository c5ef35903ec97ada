"""Database connection and schema management."""

from public_diary.db.backend import Cursor, Database, Row
from public_diary.db.sqlite_backend import SQLiteBackend

try:
    from public_diary.db.postgres_backend import PostgresBackend
except ImportError:
    PostgresBackend = None  # type: ignore[assignment,misc]

__all__ = ["Cursor", "Database", "PostgresBackend", "Row", "SQLiteBackend"]
