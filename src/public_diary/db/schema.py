"""DDL for the diary database."""

from public_diary.db.backend import Database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS diary_entries (
    date TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_entries_date_desc ON diary_entries(date DESC);

-- entry_date carries no foreign key: a version may reference a date
-- whose entry row is absent.
CREATE TABLE IF NOT EXISTS diary_versions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    entry_date TEXT NOT NULL,
    content TEXT NOT NULL,
    version_number INTEGER NOT NULL CHECK (version_number >= 1),
    created_at TEXT NOT NULL
);

-- Also added to databases created before numbering was enforced
CREATE UNIQUE INDEX IF NOT EXISTS uq_versions_entry_number
ON diary_versions(entry_date, version_number);

CREATE INDEX IF NOT EXISTS idx_versions_entry_date
ON diary_versions(entry_date, version_number DESC);

CREATE TABLE IF NOT EXISTS rate_limits (
    client_key TEXT PRIMARY KEY,
    request_count INTEGER NOT NULL,
    window_started_at TEXT NOT NULL
);
"""


async def apply_schema(db: Database) -> None:
    """Apply the database schema."""
    await db.executescript(SCHEMA_SQL)

    cursor = await db.execute("SELECT version FROM schema_version")
    row = await cursor.fetchone()
    if row is None:
        await db.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))

    await db.commit()
