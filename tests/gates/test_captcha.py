"""Tests for TurnstileVerifier (mocked HTTP)."""

import json

import httpx
import pytest

from public_diary.errors import CaptchaError
from public_diary.gates.captcha import SITEVERIFY_URL, TurnstileVerifier


def _verifier(handler) -> TurnstileVerifier:
    transport = httpx.MockTransport(handler)
    return TurnstileVerifier("secret-key", http_client=httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
async def test_accepted_token():
    verifier = _verifier(lambda req: httpx.Response(200, json={"success": True}))
    try:
        assert await verifier.verify("token") is True
    finally:
        await verifier.close()


@pytest.mark.asyncio
async def test_rejected_token():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"success": False, "error-codes": ["invalid-input-response"]}
        )

    verifier = _verifier(handler)
    try:
        assert await verifier.verify("bad-token") is False
    finally:
        await verifier.close()


@pytest.mark.asyncio
async def test_truthy_but_not_true_is_rejected():
    verifier = _verifier(lambda req: httpx.Response(200, json={"success": "yes"}))
    try:
        assert await verifier.verify("token") is False
    finally:
        await verifier.close()


@pytest.mark.asyncio
async def test_payload_sent():
    captured: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == SITEVERIFY_URL
        assert request.method == "POST"
        captured.append(json.loads(request.content))
        return httpx.Response(200, json={"success": True})

    verifier = _verifier(handler)
    try:
        await verifier.verify("client-token", remote_ip="203.0.113.7")
    finally:
        await verifier.close()

    assert captured == [
        {"secret": "secret-key", "response": "client-token", "remoteip": "203.0.113.7"}
    ]


@pytest.mark.asyncio
async def test_server_error_raises():
    verifier = _verifier(lambda req: httpx.Response(500))
    try:
        with pytest.raises(CaptchaError):
            await verifier.verify("token")
    finally:
        await verifier.close()


@pytest.mark.asyncio
async def test_connection_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    verifier = _verifier(handler)
    try:
        with pytest.raises(CaptchaError):
            await verifier.verify("token")
    finally:
        await verifier.close()


@pytest.mark.asyncio
async def test_non_json_body_raises():
    verifier = _verifier(lambda req: httpx.Response(200, text="<html>oops</html>"))
    try:
        with pytest.raises(CaptchaError):
            await verifier.verify("token")
    finally:
        await verifier.close()


@pytest.mark.asyncio
async def test_missing_success_field_raises():
    verifier = _verifier(lambda req: httpx.Response(200, json={"hostname": "x"}))
    try:
        with pytest.raises(CaptchaError):
            await verifier.verify("token")
    finally:
        await verifier.close()


@pytest.mark.asyncio
async def test_close_is_idempotent():
    verifier = _verifier(lambda req: httpx.Response(200, json={"success": True}))
    await verifier.close()
    await verifier.close()
