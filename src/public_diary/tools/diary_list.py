"""diary_list MCP tool: archive listing."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from public_diary.store.diary_store import DiaryStore
from public_diary.tools.formatters import format_entry_summary, format_result_list

_MAX_LIMIT = 100


async def list_entries(
    store: DiaryStore, limit: int = _MAX_LIMIT, include_today: bool = False
) -> str:
    """Return entry previews, newest first."""
    limit = max(1, min(limit, _MAX_LIMIT))
    if include_today:
        entries = await store.list_all(limit)
    else:
        entries = await store.list_past(limit)
    return format_result_list([format_entry_summary(e) for e in entries])


def register_diary_list(mcp: FastMCP) -> None:
    """Register the diary_list tool with the MCP server."""

    @mcp.tool()
    async def diary_list(
        limit: Annotated[
            int, Field(description="Maximum entries to list (1-100)", ge=1, le=100)
        ] = 100,
        include_today: Annotated[
            bool, Field(description="Also list today's entry, which may still change")
        ] = False,
        ctx: Context | None = None,
    ) -> str:
        """List past diary entries with short previews, newest first."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        store: DiaryStore = ctx.lifespan_context["store"]
        return await list_entries(store, limit, include_today)
