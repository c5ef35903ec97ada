"""Date keys, weekday arithmetic, and feed timestamp formatting.

Every calendar computation here is pinned to the diary timezone (UTC+9,
no daylight saving), never to the host's local zone.
"""

import re
from datetime import UTC, date, datetime, timedelta, timezone

from public_diary.errors import InvalidDateKeyError

DIARY_TZ = timezone(timedelta(hours=9), "JST")

_DATE_KEY_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_date_key(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` date key.

    Raises InvalidDateKeyError for anything that is not exactly that shape
    or that names a day the Gregorian calendar doesn't have (month 13,
    Feb 30, Feb 29 outside leap years).
    """
    if not isinstance(value, str) or _DATE_KEY_RE.fullmatch(value) is None:
        raise InvalidDateKeyError(str(value))
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDateKeyError(value) from None


def is_valid_date_key(value: str) -> bool:
    """Return True if value is a calendar-valid date key."""
    try:
        parse_date_key(value)
    except InvalidDateKeyError:
        return False
    return True


def weekday_of(date_key: str) -> int:
    """Return the day of week for a date key, Sunday = 0 through Saturday = 6."""
    d = parse_date_key(date_key)
    return _zeller(d.year, d.month, d.day)


def _zeller(year: int, month: int, day: int) -> int:
    """Zeller's congruence, Gregorian form, remapped to Sunday = 0."""
    # January and February count as months 13 and 14 of the previous year
    if month <= 2:
        month += 12
        year -= 1
    k = year % 100
    j = year // 100
    h = (day + (13 * (month + 1)) // 5 + k + k // 4 + j // 4 + 5 * j) % 7
    # h: 0 = Saturday, 1 = Sunday, ..., 6 = Friday
    return (h + 6) % 7


def to_diary_tz(instant: datetime) -> datetime:
    """Convert an instant to the diary timezone. Naive values are taken as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(DIARY_TZ)


def format_feed_timestamp(value: str | datetime) -> str:
    """Format a stored timestamp or date key as an RFC 822 feed date in +0900.

    ``"2025-01-15T10:30:45Z"`` becomes ``"Wed, 15 Jan 2025 19:30:45 +0900"``.
    A bare date key renders as midnight of that day. Malformed input is
    returned unchanged so a single bad row can't break a whole feed.
    """
    if isinstance(value, datetime):
        return _format_instant(value) or value.isoformat()
    if not isinstance(value, str) or len(value) < 10:
        return value
    if len(value) == 10:
        try:
            d = parse_date_key(value)
        except InvalidDateKeyError:
            return _format_lenient(value)
        return _format_fields(d.year, d.month, d.day, 0, 0, 0)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return _format_lenient(value)
    return _format_instant(parsed) or value


def _format_instant(instant: datetime) -> str | None:
    try:
        local = to_diary_tz(instant)
    except OverflowError:
        # Too close to datetime.min or datetime.max to shift zones
        return None
    return _format_fields(local.year, local.month, local.day, local.hour, local.minute, local.second)


def _format_lenient(value: str) -> str:
    """Best-effort field-by-field parse for timestamps fromisoformat rejects.

    Fields read from a full timestamp are taken as UTC, like any naive
    value. A bare date key stays at midnight in the diary timezone.
    """
    date_parts = value[:10].split("-")
    if len(date_parts) != 3:
        return value
    year = _int_or_none(date_parts[0])
    if year is None:
        return value
    month = _int_or_none(date_parts[1]) or 1
    day = _int_or_none(date_parts[2]) or 1

    hour = minute = second = 0
    time_parts = value[11:19].split(":")
    if len(time_parts) == 3:
        hour, minute, second = (_int_or_none(part) or 0 for part in time_parts)

    tz = DIARY_TZ if len(value) == 10 else UTC
    try:
        instant = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except ValueError:
        return value
    return _format_instant(instant) or value


def _int_or_none(part: str) -> int | None:
    if part.isascii() and part.isdigit():
        return int(part)
    return None


def _format_fields(year: int, month: int, day: int, hour: int, minute: int, second: int) -> str:
    weekday = WEEKDAY_NAMES[_zeller(year, month, day)]
    return (
        f"{weekday}, {day:02d} {MONTH_NAMES[month - 1]} {year} "
        f"{hour:02d}:{minute:02d}:{second:02d} +0900"
    )
