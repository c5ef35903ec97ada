"""FastMCP server with lifespan management and tool registration."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from public_diary.clock import Clock
from public_diary.config import (
    get_db_path,
    get_log_level,
    get_rate_limit_max,
    get_rate_limit_window,
    get_turnstile_secret,
)
from public_diary.db.connection import create_connection
from public_diary.gates.captcha import TurnstileVerifier
from public_diary.gates.rate_limit import RateLimiter
from public_diary.store.diary_store import DiaryStore
from public_diary.tools.diary_feed import register_diary_feed
from public_diary.tools.diary_list import register_diary_list
from public_diary.tools.diary_read import register_diary_read
from public_diary.tools.diary_versions import register_diary_versions
from public_diary.tools.diary_write import register_diary_write


def _create_verifier(secret: str) -> TurnstileVerifier | None:
    """Create a Turnstile verifier, or None when no secret is configured."""
    if not secret:
        return None
    return TurnstileVerifier(secret)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage the database connection, clock, and gate lifecycle."""
    # Configure logging to stderr (stdout is MCP stdio transport)
    logging.basicConfig(
        level=getattr(logging, get_log_level()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)

    db_path = get_db_path()
    logger.info("Opening database at %s", db_path)
    db = await create_connection(db_path)

    clock = Clock()
    store = DiaryStore(db, clock)
    rate_limiter = RateLimiter(
        db,
        clock,
        max_requests=get_rate_limit_max(),
        window_seconds=get_rate_limit_window(),
    )

    captcha = _create_verifier(get_turnstile_secret())
    if captcha is None:
        logger.warning("DIARY_TURNSTILE_SECRET_KEY not set, CAPTCHA check disabled")
    else:
        logger.info("Turnstile CAPTCHA check enabled")

    try:
        yield {
            "db": db,
            "clock": clock,
            "store": store,
            "rate_limiter": rate_limiter,
            "captcha": captcha,
        }
    finally:
        if captcha is not None:
            await captcha.close()
        await db.close()
        logger.info("Database connection closed")


_INSTRUCTIONS = """\
A public diary that anyone can write. There is exactly one entry per day, \
and the day is decided in Japan time (UTC+9).

- diary_read: Read today's entry, or any past day by YYYY-MM-DD.
- diary_write: Replace today's entry. Until midnight JST anyone may overwrite \
it; after that the day is final and can no longer be changed.
- diary_list: Browse past days with short previews.
- diary_feed: RSS 2.0 feed of the latest finished days.
- diary_versions: Administrators only. Shows the text each overwrite replaced.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "public-diary",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_diary_read(mcp)
    register_diary_write(mcp)
    register_diary_list(mcp)
    register_diary_feed(mcp)
    register_diary_versions(mcp)

    return mcp
