"""Cloudflare Turnstile verification client."""

import logging

import httpx

from public_diary.config import get_turnstile_timeout
from public_diary.errors import CaptchaError

logger = logging.getLogger(__name__)

SITEVERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class TurnstileVerifier:
    """Checks Turnstile tokens via the siteverify endpoint."""

    def __init__(self, secret: str, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize with the site secret and an optional HTTP client."""
        self._secret = secret
        self._http = http_client

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        """Return True if Cloudflare accepts the token.

        Raises CaptchaError when the service can't be reached or answers
        with something other than a verdict.
        """
        payload = {"secret": self._secret, "response": token, "remoteip": remote_ip}
        try:
            client = self._get_client()
            resp = await client.post(SITEVERIFY_URL, json=payload, timeout=get_turnstile_timeout())
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Turnstile verification request failed", exc_info=True)
            raise CaptchaError(f"Turnstile verification unavailable: {e}") from e

        if not isinstance(data, dict) or "success" not in data:
            raise CaptchaError("Turnstile verification returned an unexpected response")
        if data["success"] is not True:
            logger.info("Turnstile rejected token: %s", data.get("error-codes"))
            return False
        return True

    def _get_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http

    async def close(self) -> None:
        """Close the HTTP client if open."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
