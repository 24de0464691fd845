"""Fakes do pipeline de email: runtime de agente e sender."""

from __future__ import annotations

import asyncio
from typing import Any

from app.protocols.agent_runtime import AgentRuntimeError
from app.protocols.models import InboundMessage, OutboundReply
from utils.errors import ReplySendFailure


def make_message(
    *,
    sender_address: str = "alice@example.com",
    sender_name: str = "Alice",
    subject: str = "Olá",
    text: str = "Tudo bem?",
    message_id: str | None = "msg-1",
    preview: str | None = None,
) -> InboundMessage:
    return InboundMessage(
        sender_address=sender_address,
        sender_name=sender_name,
        subject=subject,
        text=text,
        message_id=message_id,
        timestamp="2026-01-01T00:00:00+00:00",
        preview=preview,
    )


class FakeAgentRuntime:
    """Runtime que devolve resposta fixa ou falha, registrando as chamadas."""

    def __init__(
        self,
        reply: str = "Resposta do agente",
        *,
        error: AgentRuntimeError | None = None,
        delay_seconds: float = 0.0,
    ) -> None:
        self.reply = reply
        self.error = error
        self.delay_seconds = delay_seconds
        self.calls: list[tuple[str, str, float]] = []
        self.active = 0
        self.max_active = 0

    async def invoke(self, session_handle: str, message: str, timeout_seconds: float) -> str:
        self.calls.append((session_handle, message, timeout_seconds))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay_seconds:
                await asyncio.sleep(self.delay_seconds)
            if self.error is not None:
                raise self.error
            return self.reply
        finally:
            self.active -= 1


class FakeReplySender:
    """Sender que registra as respostas; pode falhar em todas ou a partir da N-ésima."""

    def __init__(self, *, fail: bool = False, fail_from_call: int | None = None) -> None:
        self.fail = fail
        self.fail_from_call = fail_from_call
        self.sent: list[OutboundReply] = []
        self.attempts = 0

    async def send(self, reply: OutboundReply) -> dict[str, Any]:
        self.attempts += 1
        failing = self.fail or (
            self.fail_from_call is not None and self.attempts >= self.fail_from_call
        )
        if failing:
            raise ReplySendFailure("Resend API error: 500 - indisponível")
        self.sent.append(reply)
        return {"id": f"email-{self.attempts}"}
