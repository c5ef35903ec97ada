"""Write path and read helpers for the diary."""

import logging

from public_diary.clock import Clock, parse_date_key
from public_diary.db.backend import Database
from public_diary.errors import ContentTooLongError
from public_diary.models.entry import MAX_CONTENT_LENGTH, DiaryEntry, SaveOutcome
from public_diary.models.version import DiaryVersion
from public_diary.store.entry_store import EntryStore
from public_diary.store.version_store import VersionStore

logger = logging.getLogger(__name__)


def normalize_content(content: str) -> str:
    """Drop carriage returns so CRLF and LF submissions store identically."""
    return content.replace("\r", "")


class DiaryStore:
    """Coordinates entries and their version history.

    Only today's entry (by the clock's UTC+9 date) is ever written. Before
    today's content is replaced with something different, the old text is
    archived as the next version; saving identical content archives
    nothing.
    """

    def __init__(self, db: Database, clock: Clock, *, max_content_length: int = MAX_CONTENT_LENGTH):
        """Initialize with a database connection and a clock."""
        self.clock = clock
        self.entries = EntryStore(db)
        self.versions = VersionStore(db)
        self.max_content_length = max_content_length

    def validate_content(self, content: str) -> str:
        """Normalize content and enforce the length bound (in characters)."""
        content = normalize_content(content)
        if len(content) > self.max_content_length:
            raise ContentTooLongError(len(content), self.max_content_length)
        return content

    async def save_today(self, content: str) -> SaveOutcome:
        """Create or overwrite today's entry, archiving displaced content."""
        content = self.validate_content(content)
        today = self.clock.current_date_key()

        existing = await self.entries.get(today)
        archived: DiaryVersion | None = None
        if existing is not None and existing.content != content:
            archived = await self.versions.append(today, existing.content, self.clock.now())

        entry = await self.entries.upsert(today, content, self.clock.now())
        if existing is None:
            logger.info("Created entry %s", today)
        else:
            logger.info("Updated entry %s", today)
        return SaveOutcome(entry=entry, archived=archived)

    def is_editable(self, date_key: str) -> bool:
        """Return True if date_key is today. Every other day is frozen."""
        return self.clock.is_current(date_key)

    async def get_today(self) -> DiaryEntry | None:
        """Get today's entry, if anything has been written yet."""
        return await self.entries.get(self.clock.current_date_key())

    async def get_entry(self, date_key: str) -> DiaryEntry | None:
        """Get the entry for a date key. Raises InvalidDateKeyError for bad keys."""
        parse_date_key(date_key)
        return await self.entries.get(date_key)

    async def list_past(self, limit: int = 100) -> list[DiaryEntry]:
        """List finalized entries (everything before today), newest first."""
        return await self.entries.list_recent(before=self.clock.current_date_key(), limit=limit)

    async def list_all(self, limit: int = 100) -> list[DiaryEntry]:
        """List entries including today's, newest first."""
        return await self.entries.list_recent(limit=limit)

    async def list_versions(self, date_key: str) -> list[DiaryVersion]:
        """List archived versions of a date, newest first."""
        parse_date_key(date_key)
        return await self.versions.list_versions(date_key)

    async def get_version(self, date_key: str, version_number: int) -> DiaryVersion | None:
        """Get one archived version of a date."""
        parse_date_key(date_key)
        return await self.versions.get_version(date_key, version_number)
