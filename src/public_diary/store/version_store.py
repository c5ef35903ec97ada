"""Version history: append-only snapshots of overwritten entry content."""

import logging
from datetime import datetime

from public_diary.db.backend import Database
from public_diary.db.queries import insert_version_if_absent, row_to_version
from public_diary.errors import VersionConflictError
from public_diary.models.version import DiaryVersion

logger = logging.getLogger(__name__)

_COLUMNS = "id, entry_date, content, version_number, created_at"
_APPEND_ATTEMPTS = 2


class VersionStore:
    """Numbered, immutable history records per entry date."""

    def __init__(self, db: Database):
        """Initialize with a database connection."""
        self.db = db

    async def next_version_number(self, date_key: str) -> int:
        """Return 1 + the highest version number for a date, or 1 if none exist."""
        cursor = await self.db.execute(
            "SELECT MAX(version_number) FROM diary_versions WHERE entry_date = ?",
            (date_key,),
        )
        row = await cursor.fetchone()
        current = row[0] if row is not None else None
        return (current or 0) + 1

    async def append(self, date_key: str, content: str, now: datetime) -> DiaryVersion:
        """Archive content under the next version number for a date.

        The number is claimed by a conditional insert on
        (entry_date, version_number). If a concurrent writer took it first,
        the number is recomputed and the insert retried once.
        """
        for attempt in range(1, _APPEND_ATTEMPTS + 1):
            version_number = await self.next_version_number(date_key)
            if await insert_version_if_absent(self.db, date_key, version_number, content, now):
                version = await self.get_version(date_key, version_number)
                if version is None:
                    raise RuntimeError(f"Version {date_key} v{version_number} missing after insert")
                logger.info("Archived %s as v%d", date_key, version_number)
                return version
            logger.warning(
                "Version number %d for %s already taken (attempt %d)",
                version_number,
                date_key,
                attempt,
            )
        raise VersionConflictError(
            f"Could not assign a version number for {date_key} after {_APPEND_ATTEMPTS} attempts"
        )

    async def list_versions(self, date_key: str) -> list[DiaryVersion]:
        """Get all versions of a date, newest first."""
        cursor = await self.db.execute(
            f"""SELECT {_COLUMNS} FROM diary_versions
            WHERE entry_date = ? ORDER BY version_number DESC""",  # noqa: S608
            (date_key,),
        )
        rows = await cursor.fetchall()
        return [row_to_version(row) for row in rows]

    async def get_version(self, date_key: str, version_number: int) -> DiaryVersion | None:
        """Get one version of a date."""
        cursor = await self.db.execute(
            f"""SELECT {_COLUMNS} FROM diary_versions
            WHERE entry_date = ? AND version_number = ?""",  # noqa: S608
            (date_key, version_number),
        )
        row = await cursor.fetchone()
        return row_to_version(row) if row else None
