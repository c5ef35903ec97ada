"""diary_versions MCP tool: admin access to version history."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from public_diary.config import get_admin_token
from public_diary.errors import InvalidDateKeyError
from public_diary.gates.auth import verify_admin_token
from public_diary.store.diary_store import DiaryStore
from public_diary.tools.formatters import format_version_full, format_version_list

logger = logging.getLogger(__name__)


async def show_versions(
    store: DiaryStore,
    date: str,
    admin_token: str | None,
    expected_token: str | None,
    version_number: int | None = None,
) -> str:
    """List a day's versions, or show one version in full."""
    if not verify_admin_token(admin_token, expected_token):
        logger.warning("Rejected version history request for %s", date)
        return "Error: Unauthorized."

    try:
        if version_number is not None:
            version = await store.get_version(date, version_number)
            if version is None:
                return f"[{date}] v{version_number} not found"
            return format_version_full(version)

        current = await store.get_entry(date)
        versions = await store.list_versions(date)
    except InvalidDateKeyError as e:
        return f"Error: {e}"
    return format_version_list(date, current, versions)


def register_diary_versions(mcp: FastMCP) -> None:
    """Register the diary_versions tool with the MCP server."""

    @mcp.tool()
    async def diary_versions(
        date: Annotated[str, Field(description="Day as YYYY-MM-DD (JST)")],
        admin_token: Annotated[str, Field(description="Administrator token")],
        version_number: Annotated[
            int | None,
            Field(description="Show this version in full instead of listing", ge=1),
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Show the overwrite history of a diary day (administrators only).

        Each version is the text as it stood just before someone replaced it.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        store: DiaryStore = ctx.lifespan_context["store"]
        return await show_versions(store, date, admin_token, get_admin_token(), version_number)
