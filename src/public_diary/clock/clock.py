"""Injectable source of the current instant."""

from collections.abc import Callable
from datetime import UTC, datetime

from public_diary.clock.dates import to_diary_tz


def _wall_clock() -> datetime:
    return datetime.now(UTC)


class Clock:
    """Resolves "now" and "today" for the diary.

    Production code builds one ``Clock()`` at startup, bound to the host's
    wall clock. Tests pass their own ``now_fn`` or use ``Clock.fixed``.
    """

    def __init__(self, now_fn: Callable[[], datetime] | None = None) -> None:
        """Initialize with an optional replacement for the wall clock."""
        self._now_fn = now_fn or _wall_clock

    @classmethod
    def fixed(cls, instant: datetime) -> "Clock":
        """Build a clock frozen at one instant."""
        if instant.tzinfo is None:
            raise ValueError("Fixed clock instant must be timezone-aware")
        return cls(lambda: instant)

    def now(self) -> datetime:
        """Return the current instant in UTC."""
        instant = self._now_fn()
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return instant.astimezone(UTC)

    def current_date_key(self) -> str:
        """Return today's date key in the diary timezone (UTC+9)."""
        return to_diary_tz(self.now()).date().isoformat()

    def is_current(self, date_key: str) -> bool:
        """Return True if date_key is today in the diary timezone."""
        return date_key == self.current_date_key()
