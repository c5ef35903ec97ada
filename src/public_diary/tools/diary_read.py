"""diary_read MCP tool: today's entry or any past day."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from public_diary.errors import InvalidDateKeyError
from public_diary.store.diary_store import DiaryStore
from public_diary.tools.formatters import format_entry_full

logger = logging.getLogger(__name__)


async def read_entry(store: DiaryStore, date: str | None = None) -> str:
    """Return today's entry (or the one for ``date``) formatted for output."""
    today = store.clock.current_date_key()
    if date is None or date == today:
        entry = await store.get_entry(today)
        if entry is None:
            return f"[{today}] editable | nothing written yet"
        return format_entry_full(entry, can_edit=True)

    try:
        entry = await store.get_entry(date)
    except InvalidDateKeyError as e:
        logger.debug("Rejected read for %r: bad date key", date)
        return f"Error: {e}"
    if entry is None:
        return f"[{date}] not found"
    return format_entry_full(entry, can_edit=store.is_editable(date))


def register_diary_read(mcp: FastMCP) -> None:
    """Register the diary_read tool with the MCP server."""

    @mcp.tool()
    async def diary_read(
        date: Annotated[
            str | None,
            Field(description="Day to read as YYYY-MM-DD (JST). Omit for today."),
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Read the diary entry for today or for a given day.

        Only today's entry (Japan time) is editable; every earlier day is
        final and shown as such.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        store: DiaryStore = ctx.lifespan_context["store"]
        return await read_entry(store, date)
