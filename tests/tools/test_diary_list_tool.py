"""Tests for the diary_list tool logic."""

from datetime import UTC, datetime

import pytest

from public_diary.tools.diary_list import list_entries


async def _write_days(store, clock, days: list[int]) -> None:
    for day in days:
        clock.set(datetime(2025, 1, day, 3, 0, tzinfo=UTC))
        await store.save_today(f"day {day}")


@pytest.mark.asyncio
async def test_list_empty(store):
    assert await list_entries(store) == "No entries found."


@pytest.mark.asyncio
async def test_list_excludes_today(store, clock):
    await _write_days(store, clock, [13, 14, 15])
    result = await list_entries(store)
    assert result.splitlines() == [
        "2 entries",
        "",
        "[2025-01-14] day 14",
        "[2025-01-13] day 13",
    ]


@pytest.mark.asyncio
async def test_list_include_today(store, clock):
    await _write_days(store, clock, [14, 15])
    result = await list_entries(store, include_today=True)
    assert result.splitlines()[2] == "[2025-01-15] day 15"


@pytest.mark.asyncio
async def test_limit_clamped(store, clock):
    await _write_days(store, clock, [10, 11, 12, 13])
    assert (await list_entries(store, limit=0, include_today=True)).startswith("1 entry")
    assert (await list_entries(store, limit=500, include_today=True)).startswith("4 entries")
