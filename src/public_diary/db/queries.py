"""Row conversion and shared statements."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from public_diary.db.backend import Database, Row
from public_diary.models.entry import DiaryEntry
from public_diary.models.version import DiaryVersion


def to_storage_timestamp(instant: datetime) -> str:
    """Render an instant as sortable ISO-8601 text in UTC, second precision."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC).isoformat(timespec="seconds")


@asynccontextmanager
async def committing(db: Database) -> AsyncIterator[None]:
    """Commit the statements run inside the block, or roll them back.

    Any error raised inside the block or by the commit rolls back before
    propagating.
    """
    try:
        yield
        await db.commit()
    except Exception:
        await db.rollback()
        raise


def row_to_entry(row: Row) -> DiaryEntry:
    """Convert a database row to a DiaryEntry."""
    return DiaryEntry(
        date=row["date"],
        content=row["content"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def row_to_version(row: Row) -> DiaryVersion:
    """Convert a database row to a DiaryVersion."""
    return DiaryVersion(
        id=row["id"],
        entry_date=row["entry_date"],
        content=row["content"],
        version_number=row["version_number"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


async def insert_version_if_absent(
    db: Database, entry_date: str, version_number: int, content: str, created_at: datetime
) -> bool:
    """Insert a version unless (entry_date, version_number) is already taken.

    Returns False on collision. The unique index makes the check and the
    write a single atomic statement.
    """
    async with committing(db):
        cursor = await db.execute(
            """INSERT OR IGNORE INTO diary_versions
            (entry_date, content, version_number, created_at)
            VALUES (?, ?, ?, ?)""",
            (entry_date, content, version_number, to_storage_timestamp(created_at)),
        )
    return cursor.rowcount == 1
