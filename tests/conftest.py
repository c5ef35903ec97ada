"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from public_diary.clock import Clock
from public_diary.db.connection import create_connection
from public_diary.store.diary_store import DiaryStore
from public_diary.store.entry_store import EntryStore
from public_diary.store.version_store import VersionStore

# 2025-01-15 12:00 in Japan
DEFAULT_INSTANT = datetime(2025, 1, 15, 3, 0, 0, tzinfo=UTC)


class FakeClock(Clock):
    """Clock frozen at a settable instant."""

    def __init__(self, instant: datetime = DEFAULT_INSTANT):
        self.instant = instant
        super().__init__(lambda: self.instant)

    def advance(self, **kwargs: float) -> None:
        self.instant += timedelta(**kwargs)

    def set(self, instant: datetime) -> None:
        self.instant = instant


@pytest.fixture
def clock():
    """Clock fixed at 2025-01-15 12:00 JST."""
    return FakeClock()


@pytest_asyncio.fixture
async def db():
    """In-memory database with full schema."""
    conn = await create_connection(":memory:")
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def entries(db):
    """Entry store backed by in-memory DB."""
    return EntryStore(db)


@pytest_asyncio.fixture
async def versions(db):
    """Version store backed by in-memory DB."""
    return VersionStore(db)


@pytest_asyncio.fixture
async def store(db, clock):
    """Diary store backed by in-memory DB and the fake clock."""
    return DiaryStore(db, clock)
