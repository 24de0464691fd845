"""Testes para o endpoint de webhook AgentMail."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from api.routes.agentmail import webhook
from app.observability import get_correlation_id
from utils.errors import MalformedInboundError


def _build_request(*, body: bytes = b"", headers: dict[str, str] | None = None) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/webhook/agentmail",
        "raw_path": b"/webhook/agentmail",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


@pytest.fixture(autouse=True)
def _settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        webhook,
        "get_agentmail_settings",
        lambda: SimpleNamespace(webhook_processing_mode="inline"),
    )


@pytest.mark.asyncio
async def test_receive_webhook_success(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    async def _fake_dispatch(
        *,
        payload: dict[str, object],
        correlation_id: str,
        settings: object,
    ) -> dict[str, object]:
        captured["payload"] = payload
        captured["correlation_id"] = correlation_id
        return {"ok": True, "success": True, "userId": "alice", "hasReply": True}

    monkeypatch.setattr(webhook, "dispatch_inbound_processing", _fake_dispatch)

    request = _build_request(
        body=b'{"event_type": "message.received", "message": {}}',
        headers={"x-correlation-id": "cid-123"},
    )
    response = await webhook.receive_webhook(request)

    assert response.status_code == 200
    assert json.loads(response.body) == {
        "ok": True,
        "success": True,
        "userId": "alice",
        "hasReply": True,
    }
    assert captured == {
        "payload": {"event_type": "message.received", "message": {}},
        "correlation_id": "cid-123",
    }
    assert get_correlation_id() != "cid-123"


@pytest.mark.asyncio
async def test_receive_webhook_invalid_json() -> None:
    response = await webhook.receive_webhook(_build_request(body=b"{invalid}"))

    assert response.status_code == 400
    assert json.loads(response.body) == {"error": "invalid_json"}


@pytest.mark.asyncio
async def test_receive_webhook_malformed_message(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _raise_malformed(**kwargs: object) -> None:
        raise MalformedInboundError("payload inválido: message.from ausente")

    monkeypatch.setattr(webhook, "dispatch_inbound_processing", _raise_malformed)

    response = await webhook.receive_webhook(_build_request(body=b'{"event_type": "x"}'))

    assert response.status_code == 400
    assert json.loads(response.body) == {"error": "payload inválido: message.from ausente"}


@pytest.mark.asyncio
async def test_receive_webhook_dispatch_failure_returns_500(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    async def _raise_dispatch(**kwargs: object) -> None:
        raise RuntimeError("identity config corrompido")

    monkeypatch.setattr(webhook, "dispatch_inbound_processing", _raise_dispatch)

    with caplog.at_level("ERROR"):
        response = await webhook.receive_webhook(_build_request(body=b"{}"))

    assert response.status_code == 500
    assert json.loads(response.body) == {"error": "identity config corrompido"}
    assert "webhook_processing_failed" in caplog.text


@pytest.mark.asyncio
async def test_receive_webhook_generates_correlation_id(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, str] = {}

    async def _fake_dispatch(*, payload: object, correlation_id: str, settings: object) -> dict[str, object]:
        captured["correlation_id"] = correlation_id
        return {"ok": True, "processed": False, "type": None}

    monkeypatch.setattr(webhook, "dispatch_inbound_processing", _fake_dispatch)

    response = await webhook.receive_webhook(_build_request(body=b"{}"))

    assert response.status_code == 200
    assert captured["correlation_id"]
