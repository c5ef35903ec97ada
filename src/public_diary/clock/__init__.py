"""Clock and calendar helpers pinned to the diary timezone."""

from public_diary.clock.clock import Clock
from public_diary.clock.dates import (
    DIARY_TZ,
    format_feed_timestamp,
    is_valid_date_key,
    parse_date_key,
    weekday_of,
)

__all__ = [
    "DIARY_TZ",
    "Clock",
    "format_feed_timestamp",
    "is_valid_date_key",
    "parse_date_key",
    "weekday_of",
]
