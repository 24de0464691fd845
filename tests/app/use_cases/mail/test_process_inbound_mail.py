"""Testes do pipeline completo de email (use case)."""

from __future__ import annotations

import sys
from typing import Any

import httpx
import pytest

from api.connectors.http_base import HttpClientConfig
from api.connectors.resend import ResendHttpClient
from app.bootstrap.adapters import ResendReplySender
from app.infra.runtime.cli_runtime import CliAgentRuntime
from app.infra.stores.memory_stores import MemoryIdentityLinkStore, MemorySessionRegistry
from app.protocols.agent_runtime import AgentRuntimeError, AgentRuntimeProtocol
from app.protocols.models import OutboundReply
from app.protocols.reply_sender import ReplySenderProtocol
from app.services.dispatcher import Dispatcher
from app.services.identity_resolver import IdentityResolver
from app.services.reply_composer import ReplyComposer
from app.services.session_locator import SessionLocator
from app.use_cases.mail import UNKNOWN_SENDER_ERROR, ProcessInboundMailUseCase
from tests.fakes.fake_mail import FakeAgentRuntime, FakeReplySender, make_message

LINKS = {"alice": ["email:alice@example.com"], "bob": ["email:bob@example.com"]}
SESSIONS = {"agent:main:alice": {"sessionId": "uuid-alice"}}


def build_use_case(
    runtime: AgentRuntimeProtocol,
    sender: ReplySenderProtocol,
    *,
    sessions: dict[str, dict[str, str]] | None = None,
) -> ProcessInboundMailUseCase:
    return ProcessInboundMailUseCase(
        resolver=IdentityResolver(MemoryIdentityLinkStore(LINKS)),
        locator=SessionLocator(MemorySessionRegistry(SESSIONS if sessions is None else sessions)),
        dispatcher=Dispatcher(runtime),
        composer=ReplyComposer(signature=None),
        sender=sender,
    )


class TestUnknownSender:
    @pytest.mark.asyncio
    async def test_rejected_without_dispatch_or_reply(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        runtime = FakeAgentRuntime()
        sender = FakeReplySender()
        use_case = build_use_case(runtime, sender)

        with caplog.at_level("WARNING"):
            result = await use_case.execute(make_message(sender_address="mallory@evil.com"))

        assert result.success is False
        assert result.error == UNKNOWN_SENDER_ERROR
        assert result.final_state == "REJECTED"
        assert runtime.calls == []
        assert sender.attempts == 0
        assert result.to_dict() == {"success": False, "error": "Unknown sender"}
        assert "mallory@evil.com" not in caplog.text


class TestForward:
    @pytest.mark.asyncio
    async def test_reply_is_sent_threaded(self) -> None:
        runtime = FakeAgentRuntime("  Oi Alice!  ")
        sender = FakeReplySender()
        use_case = build_use_case(runtime, sender)

        result = await use_case.execute(make_message(subject="Pergunta", message_id="msg-9"))

        assert result.success is True
        assert result.has_reply is True
        assert result.final_state == "DONE"
        assert result.to_dict() == {"success": True, "userId": "alice", "hasReply": True}

        handle, envelope, timeout = runtime.calls[0]
        assert handle == "uuid-alice"
        assert "Tudo bem?" in envelope
        assert timeout == 120.0

        assert len(sender.sent) == 1
        reply = sender.sent[0]
        assert reply.subject == "Re: Pergunta"
        assert reply.text_body == "Oi Alice!"
        assert reply.in_reply_to == "msg-9"

    @pytest.mark.asyncio
    async def test_sentinel_suppresses_reply(self) -> None:
        runtime = FakeAgentRuntime("  NO_REPLY \n")
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender).execute(make_message())

        assert result.success is True
        assert result.has_reply is False
        assert sender.attempts == 0
        assert result.to_dict() == {"success": True, "userId": "alice", "hasReply": False}

    @pytest.mark.asyncio
    async def test_dispatch_failure_sends_apology_with_cause(self) -> None:
        runtime = FakeAgentRuntime(error=AgentRuntimeError("Runtime não respondeu em 120s", timed_out=True))
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender).execute(make_message(subject="Dúvida"))

        assert result.success is False
        assert result.error == "Runtime não respondeu em 120s"
        assert result.final_state == "DONE"
        assert len(sender.sent) == 1
        apology = sender.sent[0]
        assert apology.subject == "Re: Dúvida"
        assert "Runtime não respondeu em 120s" in apology.text_body
        assert result.to_dict() == {"success": False, "error": "Runtime não respondeu em 120s"}

    @pytest.mark.asyncio
    async def test_missing_session_sends_apology_and_never_dispatches(self) -> None:
        runtime = FakeAgentRuntime()
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender, sessions={}).execute(make_message())

        assert result.success is False
        assert result.error is not None
        assert "agent:main:alice" in result.error
        assert runtime.calls == []
        assert len(sender.sent) == 1
        assert "agent:main:alice" in sender.sent[0].text_body

    @pytest.mark.asyncio
    async def test_reply_send_failure_triggers_apology_attempt(self) -> None:
        runtime = FakeAgentRuntime("Resposta")
        sender = FakeReplySender(fail_from_call=1)

        result = await build_use_case(runtime, sender).execute(make_message())

        assert result.success is False
        assert result.error == "Resend API error: 500 - indisponível"
        assert sender.attempts == 2
        assert result.final_state == "DONE"

    @pytest.mark.asyncio
    async def test_apology_failure_is_swallowed(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        runtime = FakeAgentRuntime(error=AgentRuntimeError("boom"))
        sender = FakeReplySender(fail=True)

        with caplog.at_level("ERROR"):
            result = await build_use_case(runtime, sender).execute(make_message())

        assert result.success is False
        assert result.error == "boom"
        assert sender.attempts == 1
        assert "apology_send_failed" in caplog.text


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_dispatches_instruction_and_acknowledges(self) -> None:
        runtime = FakeAgentRuntime("ok")
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender).execute(make_message(subject="  NEW "))

        assert result.success is True
        assert result.reset is True
        assert result.to_dict() == {"success": True, "reset": True}
        assert runtime.calls == [("uuid-alice", "/new", 30.0)]
        assert len(sender.sent) == 1
        assert sender.sent[0].text_body == "Sessão reiniciada."

    @pytest.mark.asyncio
    async def test_reset_without_session_is_silent(self) -> None:
        runtime = FakeAgentRuntime()
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender, sessions={}).execute(
            make_message(subject="NEW")
        )

        assert result.to_dict() == {"success": True, "reset": True}
        assert runtime.calls == []
        assert sender.attempts == 0

    @pytest.mark.asyncio
    async def test_reset_dispatch_failure_never_apologizes(self) -> None:
        runtime = FakeAgentRuntime(error=AgentRuntimeError("boom"))
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender).execute(make_message(subject="NEW"))

        assert result.success is True
        assert result.reset is True
        assert sender.attempts == 0

    @pytest.mark.asyncio
    async def test_reset_ack_failure_is_logged_only(self) -> None:
        runtime = FakeAgentRuntime("ok")
        sender = FakeReplySender(fail=True)

        result = await build_use_case(runtime, sender).execute(make_message(subject="NEW"))

        assert result.success is True
        assert result.reset is True
        assert sender.attempts == 1
        assert result.final_state == "DONE"

    @pytest.mark.asyncio
    async def test_lowercase_token_is_forwarded(self) -> None:
        runtime = FakeAgentRuntime("resposta")
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender).execute(make_message(subject="new"))

        assert result.reset is False
        assert runtime.calls[0][1] != "/new"


class BrokenRuntime:
    """Runtime que levanta um erro não traduzido."""

    def __init__(self) -> None:
        self.calls = 0

    async def invoke(self, session_handle: str, message: str, timeout_seconds: float) -> str:
        self.calls += 1
        raise RuntimeError("runtime quebrado")


class BrokenSender:
    """Sender que levanta um erro fora da taxonomia de envio."""

    def __init__(self) -> None:
        self.attempts = 0

    async def send(self, reply: OutboundReply) -> dict[str, Any]:
        self.attempts += 1
        raise KeyError("id")


def _resend_sender(handler) -> ResendReplySender:
    config = HttpClientConfig(backoff_base_seconds=0, transport=httpx.MockTransport(handler))
    client = ResendHttpClient("re_test", "https://api.resend.test/emails", config)
    return ResendReplySender(client, "bot@mail.dev")


class TestUntranslatedFailures:
    @pytest.mark.asyncio
    async def test_null_byte_body_with_cli_runtime_sends_apology(self) -> None:
        runtime = CliAgentRuntime(sys.executable, base_args=("-c", "print('ok')"))
        sender = FakeReplySender()

        result = await build_use_case(runtime, sender).execute(make_message(text="a\x00b"))

        assert result.success is False
        assert result.error is not None
        assert "Falha ao iniciar runtime" in result.error
        assert result.final_state == "DONE"
        assert len(sender.sent) == 1

    @pytest.mark.asyncio
    async def test_unexpected_runtime_error_sends_apology_with_cause(self) -> None:
        sender = FakeReplySender()

        result = await build_use_case(BrokenRuntime(), sender).execute(make_message())

        assert result.success is False
        assert result.error == "runtime quebrado"
        assert len(sender.sent) == 1
        assert "runtime quebrado" in sender.sent[0].text_body

    @pytest.mark.asyncio
    async def test_transport_read_error_on_apology_is_swallowed(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadError("conexão resetada", request=request)

        runtime = FakeAgentRuntime(error=AgentRuntimeError("boom"))

        with caplog.at_level("ERROR"):
            result = await build_use_case(runtime, _resend_sender(handler)).execute(make_message())

        assert result.success is False
        assert result.error == "boom"
        assert result.final_state == "DONE"
        assert "apology_send_failed" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_sender_error_on_apology_is_swallowed(self) -> None:
        sender = BrokenSender()
        runtime = FakeAgentRuntime(error=AgentRuntimeError("boom"))

        result = await build_use_case(runtime, sender).execute(make_message())

        assert result.success is False
        assert result.error == "boom"
        assert sender.attempts == 1

    @pytest.mark.asyncio
    async def test_unexpected_sender_error_on_reset_ack_is_logged_only(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        sender = BrokenSender()

        with caplog.at_level("ERROR"):
            result = await build_use_case(FakeAgentRuntime("ok"), sender).execute(
                make_message(subject="NEW")
            )

        assert result.success is True
        assert result.reset is True
        assert sender.attempts == 1
        assert "reset_ack_send_failed" in caplog.text
