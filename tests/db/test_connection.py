"""Tests for database connection and schema initialization."""

from unittest.mock import patch

import pytest

from public_diary.db.connection import create_connection
from public_diary.db.schema import SCHEMA_VERSION, apply_schema
from public_diary.errors import StorageError


@pytest.mark.asyncio
async def test_create_in_memory_connection():
    db = await create_connection(":memory:")
    try:
        cursor = await db.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        tables = {row[0] for row in await cursor.fetchall()}
        assert "diary_entries" in tables
        assert "diary_versions" in tables
        assert "rate_limits" in tables
        assert "schema_version" in tables
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_indexes_created():
    db = await create_connection(":memory:")
    try:
        cursor = await db.execute("SELECT name FROM sqlite_master WHERE type='index'")
        indexes = {row[0] for row in await cursor.fetchall()}
        assert "uq_versions_entry_number" in indexes
        assert "idx_versions_entry_date" in indexes
        assert "idx_entries_date_desc" in indexes
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_schema_version():
    db = await create_connection(":memory:")
    try:
        cursor = await db.execute("SELECT version FROM schema_version")
        row = await cursor.fetchone()
        assert row[0] == SCHEMA_VERSION
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_schema_idempotent():
    db = await create_connection(":memory:")
    try:
        await apply_schema(db)
        cursor = await db.execute("SELECT COUNT(*) FROM schema_version")
        row = await cursor.fetchone()
        assert row[0] == 1
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_version_number_must_be_positive():
    db = await create_connection(":memory:")
    try:
        with pytest.raises(StorageError):
            await db.execute(
                """INSERT INTO diary_versions (entry_date, content, version_number, created_at)
                VALUES (?, ?, ?, ?)""",
                ("2025-01-15", "x", 0, "2025-01-15T03:00:00+00:00"),
            )
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_bad_sql_raises_storage_error():
    db = await create_connection(":memory:")
    try:
        with pytest.raises(StorageError):
            await db.execute("SELECT * FROM no_such_table")
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_file_database_creates_parent_dirs(tmp_path):
    path = tmp_path / "nested" / "dir" / "diary.db"
    db = await create_connection(path)
    try:
        assert path.exists()
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_memory_ignores_database_url():
    with patch.dict("os.environ", {"DIARY_DATABASE_URL": "postgresql://nowhere/diary"}):
        db = await create_connection(":memory:")
    try:
        cursor = await db.execute("SELECT version FROM schema_version")
        assert (await cursor.fetchone())[0] == SCHEMA_VERSION
    finally:
        await db.close()
