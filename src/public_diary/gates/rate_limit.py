"""Per-client write throttling, counted in fixed windows."""

import logging
from datetime import datetime, timedelta

from public_diary.clock import Clock
from public_diary.db.backend import Database
from public_diary.db.queries import committing, to_storage_timestamp

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 60
DEFAULT_WINDOW_SECONDS = 3600


def is_over_limit(count: int, max_requests: int = DEFAULT_MAX_REQUESTS) -> bool:
    """Return True once count has reached the allowance."""
    return count >= max_requests


class RateLimiter:
    """Counts successful writes per client key.

    A window opens at a client's first recorded write and lasts
    ``window_seconds``; the count resets once it has expired.
    """

    def __init__(
        self,
        db: Database,
        clock: Clock,
        *,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
    ) -> None:
        """Initialize with a database connection, a clock, and limits."""
        self.db = db
        self.clock = clock
        self.max_requests = max_requests
        self.window = timedelta(seconds=window_seconds)

    async def _current_count(self, client_key: str, now: datetime) -> int:
        cursor = await self.db.execute(
            "SELECT request_count, window_started_at FROM rate_limits WHERE client_key = ?",
            (client_key,),
        )
        row = await cursor.fetchone()
        if row is None:
            return 0
        started = datetime.fromisoformat(row["window_started_at"])
        if now - started >= self.window:
            return 0
        return int(row["request_count"])

    async def is_limited(self, client_key: str) -> bool:
        """Return True if client_key has used up its allowance."""
        count = await self._current_count(client_key, self.clock.now())
        return is_over_limit(count, self.max_requests)

    async def record(self, client_key: str) -> int:
        """Count one write for client_key and return the new count.

        The increment, or the window restart once the stored window has
        expired, happens in one upsert.
        """
        now = self.clock.now()
        stamp = to_storage_timestamp(now)
        expired_before = to_storage_timestamp(now - self.window)
        async with committing(self.db):
            cursor = await self.db.execute(
                """INSERT INTO rate_limits (client_key, request_count, window_started_at)
                VALUES (?, 1, ?)
                ON CONFLICT(client_key) DO UPDATE SET
                  request_count = CASE
                    WHEN rate_limits.window_started_at <= ? THEN 1
                    ELSE rate_limits.request_count + 1
                  END,
                  window_started_at = CASE
                    WHEN rate_limits.window_started_at <= ? THEN excluded.window_started_at
                    ELSE rate_limits.window_started_at
                  END
                RETURNING request_count""",
                (client_key, stamp, expired_before, expired_before),
            )
            rows = await cursor.fetchall()
        new_count = int(rows[0]["request_count"])
        if is_over_limit(new_count, self.max_requests):
            logger.info("Client %s reached the write limit", client_key)
        return new_count
