"""Testes do cliente HTTP da Resend com httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from api.connectors.http_base import HttpClientConfig, HttpError
from api.connectors.resend import ResendApiError, ResendHttpClient, create_resend_http_client
from config.settings.resend import ResendSettings

ENDPOINT = "https://api.resend.test/emails"
PAYLOAD = {"from": "bot@mail.dev", "to": ["alice@example.com"], "subject": "Re: x"}


def _client(handler, *, api_key: str = "re_test", max_retries: int = 0) -> ResendHttpClient:
    config = HttpClientConfig(
        max_retries=max_retries,
        backoff_base_seconds=0,
        transport=httpx.MockTransport(handler),
    )
    return ResendHttpClient(api_key, ENDPOINT, config)


@pytest.mark.asyncio
async def test_success_returns_provider_json_and_sends_bearer() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "email-1"})

    result = await _client(handler).send_email(PAYLOAD)

    assert result == {"id": "email-1"}
    assert seen[0].headers["Authorization"] == "Bearer re_test"
    assert json.loads(seen[0].content) == PAYLOAD


@pytest.mark.asyncio
async def test_non_json_success_is_wrapped() -> None:
    result = await _client(lambda request: httpx.Response(202, text="accepted")).send_email(PAYLOAD)
    assert result == {"success": True, "raw": "accepted"}


@pytest.mark.asyncio
async def test_error_status_raises_with_provider_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"statusCode": 422, "message": "Invalid `to` field"})

    with pytest.raises(ResendApiError) as exc_info:
        await _client(handler).send_email(PAYLOAD)

    assert exc_info.value.status_code == 422
    assert str(exc_info.value) == "Resend API error: 422 - Invalid `to` field"


@pytest.mark.asyncio
async def test_error_status_without_json_uses_body() -> None:
    with pytest.raises(ResendApiError, match="503 - down"):
        await _client(lambda request: httpx.Response(503, text="down")).send_email(PAYLOAD)


@pytest.mark.asyncio
async def test_retryable_status_is_retried_when_configured() -> None:
    statuses = iter([503, 200])

    def handler(request: httpx.Request) -> httpx.Response:
        status = next(statuses)
        return httpx.Response(status, json={"id": "email-2"} if status == 200 else {})

    result = await _client(handler, max_retries=1).send_email(PAYLOAD)
    assert result == {"id": "email-2"}


@pytest.mark.asyncio
async def test_connection_error_becomes_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("recusado", request=request)

    with pytest.raises(HttpError, match="http_connection_error"):
        await _client(handler).send_email(PAYLOAD)


@pytest.mark.asyncio
async def test_read_error_becomes_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadError("conexão resetada", request=request)

    with pytest.raises(HttpError, match="http_connection_error") as exc_info:
        await _client(handler).send_email(PAYLOAD)
    assert exc_info.value.is_retryable is True


@pytest.mark.asyncio
async def test_missing_api_key_fails_before_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    with pytest.raises(ValueError, match="RESEND_API_KEY"):
        await _client(handler, api_key="  ").send_email(PAYLOAD)
    assert calls == []


@pytest.mark.asyncio
async def test_factory_uses_settings_endpoint() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"id": "x"})

    settings = ResendSettings(api_key="k", from_email="bot@mail.dev", api_base_url="https://r.test/")
    client = create_resend_http_client(settings, transport=httpx.MockTransport(handler))

    await client.send_email(PAYLOAD)

    assert seen == ["https://r.test/emails"]
