"""Tests for date keys, weekdays, and feed timestamps."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from public_diary.clock import format_feed_timestamp, is_valid_date_key, parse_date_key, weekday_of
from public_diary.errors import InvalidDateKeyError


class TestParseDateKey:
    def test_valid(self):
        assert parse_date_key("2025-01-15") == date(2025, 1, 15)

    def test_leap_day_in_leap_year(self):
        assert parse_date_key("2024-02-29") == date(2024, 2, 29)

    def test_leap_day_in_400_year(self):
        assert parse_date_key("2000-02-29") == date(2000, 2, 29)

    @pytest.mark.parametrize(
        "value",
        [
            "2025-02-29",  # not a leap year
            "1900-02-29",  # divisible by 100, not by 400
            "2025-02-30",
            "2025-04-31",
            "2025-13-01",
            "2025-00-15",
            "2025-01-00",
            "2025-01-32",
            "0000-01-01",
        ],
    )
    def test_calendar_invalid(self, value):
        with pytest.raises(InvalidDateKeyError):
            parse_date_key(value)

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "2025-1-15",
            "2025/01/15",
            "20250115",
            "2025-01-15T00:00:00",
            "2025-01-15\n",
            " 2025-01-15",
            "２０２５-01-15",
            "abcd-ef-gh",
        ],
    )
    def test_wrong_shape(self, value):
        with pytest.raises(InvalidDateKeyError):
            parse_date_key(value)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            parse_date_key("2025-13-01")

    def test_is_valid_date_key(self):
        assert is_valid_date_key("2024-02-29")
        assert not is_valid_date_key("2025-02-29")


class TestWeekdayOf:
    @pytest.mark.parametrize(
        ("date_key", "expected"),
        [
            ("2025-01-15", 3),  # Wednesday
            ("2000-01-01", 6),  # Saturday
            ("2000-02-29", 2),  # Tuesday
            ("1969-07-20", 0),  # Sunday
            ("1900-01-01", 1),  # Monday
            ("1776-07-04", 4),  # Thursday
            ("1600-03-01", 3),  # Wednesday
            ("2100-12-31", 5),  # Friday
            ("0001-01-01", 1),  # Monday, proleptic Gregorian
            ("9999-12-31", 5),  # Friday
        ],
    )
    def test_known_dates(self, date_key, expected):
        assert weekday_of(date_key) == expected

    def test_agrees_with_datetime_across_years(self):
        """Every day of a 30-year span, plus January/February around century years."""
        day = date(1995, 1, 1)
        while day < date(2025, 1, 1):
            assert weekday_of(day.isoformat()) == day.isoweekday() % 7
            day += timedelta(days=1)
        for year in (1600, 1700, 1800, 1900, 2000, 2100, 2400):
            for month in (1, 2, 3):
                d = date(year, month, 1)
                assert weekday_of(d.isoformat()) == d.isoweekday() % 7

    def test_invalid_key_raises(self):
        with pytest.raises(InvalidDateKeyError):
            weekday_of("2025-02-29")


class TestFormatFeedTimestamp:
    def test_utc_is_converted_to_jst(self):
        assert format_feed_timestamp("2025-01-15T10:30:45Z") == "Wed, 15 Jan 2025 19:30:45 +0900"

    def test_explicit_utc_offset(self):
        assert (
            format_feed_timestamp("2025-01-15T10:30:45+00:00") == "Wed, 15 Jan 2025 19:30:45 +0900"
        )

    def test_already_jst_keeps_wall_time(self):
        assert (
            format_feed_timestamp("2025-01-15T10:30:45+09:00") == "Wed, 15 Jan 2025 10:30:45 +0900"
        )

    def test_conversion_crosses_midnight(self):
        assert format_feed_timestamp("2025-01-15T15:00:00Z") == "Thu, 16 Jan 2025 00:00:00 +0900"

    def test_conversion_crosses_year(self):
        assert format_feed_timestamp("2024-12-31T20:00:00Z") == "Wed, 01 Jan 2025 05:00:00 +0900"

    def test_other_offset(self):
        assert (
            format_feed_timestamp("2025-01-15T10:30:45-05:00") == "Thu, 16 Jan 2025 00:30:45 +0900"
        )

    def test_fractional_seconds(self):
        assert (
            format_feed_timestamp("2025-01-15T10:30:45.123456+00:00")
            == "Wed, 15 Jan 2025 19:30:45 +0900"
        )

    def test_naive_timestamp_is_utc(self):
        assert format_feed_timestamp("2025-01-15T10:30:45") == "Wed, 15 Jan 2025 19:30:45 +0900"

    def test_date_only_is_midnight_jst(self):
        assert format_feed_timestamp("2024-02-29") == "Thu, 29 Feb 2024 00:00:00 +0900"

    def test_datetime_input(self):
        instant = datetime(2025, 1, 15, 10, 30, 45, tzinfo=UTC)
        assert format_feed_timestamp(instant) == "Wed, 15 Jan 2025 19:30:45 +0900"

    def test_datetime_in_other_zone(self):
        instant = datetime(2025, 1, 15, 19, 30, 45, tzinfo=timezone(timedelta(hours=9)))
        assert format_feed_timestamp(instant) == "Wed, 15 Jan 2025 19:30:45 +0900"

    def test_day_is_zero_padded(self):
        assert format_feed_timestamp("2025-03-01T00:00:00Z") == "Sat, 01 Mar 2025 09:00:00 +0900"

    @pytest.mark.parametrize("value", ["", "2025", "2025-01-1", "garbage"])
    def test_short_input_returned_unchanged(self, value):
        assert format_feed_timestamp(value) == value

    def test_unreadable_year_returned_unchanged(self):
        assert format_feed_timestamp("yyyy-01-15T10:30:45Z") == "yyyy-01-15T10:30:45Z"

    def test_invalid_calendar_date_returned_unchanged(self):
        assert format_feed_timestamp("2025-02-30T10:30:45Z") == "2025-02-30T10:30:45Z"
        assert format_feed_timestamp("2025-13-01") == "2025-13-01"

    def test_unreadable_day_defaults_to_first(self):
        assert format_feed_timestamp("2025-01-xxT10:30:45Z") == "Wed, 01 Jan 2025 19:30:45 +0900"
        assert format_feed_timestamp("2025-01-xx") == "Wed, 01 Jan 2025 00:00:00 +0900"

    def test_unreadable_time_defaults_to_midnight(self):
        assert format_feed_timestamp("2025-01-15Tab:cd:efZ") == "Wed, 15 Jan 2025 09:00:00 +0900"

    @pytest.mark.parametrize(
        ("loose", "strict"),
        [
            ("2025-01-15T10:30:45 UTC", "2025-01-15T10:30:45Z"),
            ("2025-01-15T20:00:00 GMT", "2025-01-15T20:00:00Z"),
            ("2025-01-15 10:30:45 +0000 extra", "2025-01-15T10:30:45Z"),
        ],
    )
    def test_fallback_parse_matches_strict_parse(self, loose, strict):
        assert format_feed_timestamp(loose) == format_feed_timestamp(strict)

    def test_fallback_parse_crosses_day_boundary(self):
        assert format_feed_timestamp("2025-01-15T20:00:00 UTC") == (
            "Thu, 16 Jan 2025 05:00:00 +0900"
        )

    def test_fallback_near_max_returned_unchanged(self):
        assert format_feed_timestamp("9999-12-31T23:00:00 UTC") == "9999-12-31T23:00:00 UTC"

    def test_out_of_range_after_shift_returned_unchanged(self):
        assert format_feed_timestamp("9999-12-31T23:00:00Z") == "9999-12-31T23:00:00Z"

    def test_never_raises(self):
        for value in ["2025-01-15T99:99:99Z", "----------", "2025-01-15T", "9999-99-99T99"]:
            result = format_feed_timestamp(value)
            assert isinstance(result, str)
