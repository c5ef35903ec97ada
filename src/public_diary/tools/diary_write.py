"""diary_write MCP tool: overwrite today's entry."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from public_diary.errors import CaptchaError, ContentTooLongError, StorageError
from public_diary.gates.captcha import TurnstileVerifier
from public_diary.gates.rate_limit import RateLimiter
from public_diary.store.diary_store import DiaryStore
from public_diary.tools.formatters import format_save_result

logger = logging.getLogger(__name__)

_UNKNOWN_CLIENT = "unknown"


async def write_today(
    store: DiaryStore,
    content: str,
    *,
    rate_limiter: RateLimiter | None = None,
    verifier: TurnstileVerifier | None = None,
    turnstile_token: str | None = None,
    client_ip: str | None = None,
) -> str:
    """Run the gates, then save today's entry. Returns the tool response."""
    client_key = client_ip or _UNKNOWN_CLIENT

    if rate_limiter is not None and await rate_limiter.is_limited(client_key):
        logger.info("Write rejected for %s: rate limited", client_key)
        return "Error: Too many requests. Try again later."

    if verifier is not None:
        if not turnstile_token:
            return "Error: Turnstile token required."
        try:
            passed = await verifier.verify(turnstile_token, remote_ip=client_ip)
        except CaptchaError as e:
            return f"Error: {e}"
        if not passed:
            return "Error: Turnstile verification failed."

    try:
        outcome = await store.save_today(content)
    except ContentTooLongError as e:
        return f"Error: {e}"
    except StorageError as e:
        logger.error("Failed to save today's entry: %s", e)
        return f"Error: Failed to save entry, please retry. ({e})"

    if rate_limiter is not None:
        try:
            await rate_limiter.record(client_key)
        except StorageError:
            logger.warning("Failed to record write for %s", client_key, exc_info=True)

    return format_save_result(outcome)


def register_diary_write(mcp: FastMCP) -> None:
    """Register the diary_write tool with the MCP server."""

    @mcp.tool()
    async def diary_write(
        content: Annotated[str, Field(description="Full text of today's entry (max 10000 chars)")],
        turnstile_token: Annotated[
            str | None,
            Field(description="Cloudflare Turnstile token, required when CAPTCHA is enabled"),
        ] = None,
        client_ip: Annotated[
            str | None,
            Field(description="Caller's IP address, used for rate limiting"),
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Write today's diary entry, replacing whatever is there.

        Anyone may overwrite today's entry until midnight Japan time, after
        which the day is final. The replaced text is kept in the version
        history; saving the same text again changes nothing.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        lifespan = ctx.lifespan_context
        return await write_today(
            lifespan["store"],
            content,
            rate_limiter=lifespan.get("rate_limiter"),
            verifier=lifespan.get("captcha"),
            turnstile_token=turnstile_token,
            client_ip=client_ip,
        )
