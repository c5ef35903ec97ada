"""Diary entry persistence: one row per date key."""

from datetime import datetime

from public_diary.db.backend import Database
from public_diary.db.queries import committing, row_to_entry, to_storage_timestamp
from public_diary.models.entry import DiaryEntry

_COLUMNS = "date, content, created_at, updated_at"


class EntryStore:
    """Point lookups, listings, and upserts for diary entries."""

    def __init__(self, db: Database):
        """Initialize with a database connection."""
        self.db = db

    async def get(self, date_key: str) -> DiaryEntry | None:
        """Get the entry for a date key."""
        cursor = await self.db.execute(
            f"SELECT {_COLUMNS} FROM diary_entries WHERE date = ?",  # noqa: S608
            (date_key,),
        )
        row = await cursor.fetchone()
        return row_to_entry(row) if row else None

    async def list_recent(self, before: str | None = None, limit: int = 100) -> list[DiaryEntry]:
        """List entries newest first.

        With ``before``, only entries whose date key sorts strictly earlier
        are returned; callers pass today's key to leave out the entry that is
        still being written.
        """
        if before is None:
            cursor = await self.db.execute(
                f"SELECT {_COLUMNS} FROM diary_entries ORDER BY date DESC LIMIT ?",  # noqa: S608
                (limit,),
            )
        else:
            cursor = await self.db.execute(
                f"""SELECT {_COLUMNS} FROM diary_entries
                WHERE date < ? ORDER BY date DESC LIMIT ?""",  # noqa: S608
                (before, limit),
            )
        rows = await cursor.fetchall()
        return [row_to_entry(row) for row in rows]

    async def upsert(self, date_key: str, content: str, now: datetime) -> DiaryEntry:
        """Insert or replace the entry for a date key.

        created_at is only set on the first write; later writes replace the
        content and move updated_at. The returned entry is the row this
        statement wrote, not a later read.
        """
        stamp = to_storage_timestamp(now)
        async with committing(self.db):
            cursor = await self.db.execute(
                f"""INSERT INTO diary_entries (date, content, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(date) DO UPDATE SET
                  content = excluded.content,
                  updated_at = excluded.updated_at
                RETURNING {_COLUMNS}""",  # noqa: S608
                (date_key, content, stamp, stamp),
            )
            rows = await cursor.fetchall()
        if not rows:
            raise RuntimeError(f"Entry {date_key} missing after upsert")
        return row_to_entry(rows[0])
