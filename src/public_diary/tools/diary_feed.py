"""diary_feed MCP tool: RSS of finalized entries."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from public_diary.config import get_base_url
from public_diary.feed.rss import FEED_ITEM_LIMIT, render_rss
from public_diary.store.diary_store import DiaryStore


async def build_feed(store: DiaryStore, base_url: str) -> str:
    """Render the RSS document for the most recent finalized entries."""
    entries = await store.list_past(FEED_ITEM_LIMIT)
    return render_rss(entries, base_url)


def register_diary_feed(mcp: FastMCP) -> None:
    """Register the diary_feed tool with the MCP server."""

    @mcp.tool()
    async def diary_feed(
        base_url: Annotated[
            str | None,
            Field(description="Site address used for item links. Defaults to DIARY_BASE_URL."),
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Return the RSS 2.0 feed of the latest finished diary days.

        Today's entry is left out until the day is over.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        store: DiaryStore = ctx.lifespan_context["store"]
        return await build_feed(store, base_url or get_base_url())
