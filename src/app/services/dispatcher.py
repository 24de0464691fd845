"""Despacho de texto para o runtime de agente com timeout.

Dois despachos com timeouts distintos: mensagem completa (inferência,
120s) e reset de sessão (operação de controle, 30s). Despachos para a
mesma chave de sessão são serializados; chaves distintas seguem em
paralelo.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from typing import TYPE_CHECKING

from app.observability import record_latency
from app.protocols.agent_runtime import AgentRuntimeError
from config.settings.runtime import DEFAULT_RESET_INSTRUCTION
from utils.errors import DispatchFailure

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from app.protocols.agent_runtime import AgentRuntimeProtocol
    from app.protocols.models import SessionReference
    from config.settings import RuntimeSettings

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_TIMEOUT_SECONDS = 120.0
DEFAULT_RESET_TIMEOUT_SECONDS = 30.0


class SessionLocks:
    """Um asyncio.Lock por chave de sessão, descartado quando ninguém espera."""

    __slots__ = ("_locks", "_users")

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]


class Dispatcher:
    """Entrega texto à sessão do runtime e devolve a resposta textual."""

    def __init__(
        self,
        runtime: AgentRuntimeProtocol,
        *,
        reset_instruction: str = DEFAULT_RESET_INSTRUCTION,
        message_timeout_seconds: float = DEFAULT_MESSAGE_TIMEOUT_SECONDS,
        reset_timeout_seconds: float = DEFAULT_RESET_TIMEOUT_SECONDS,
        serialize_per_session: bool = True,
    ) -> None:
        self._runtime = runtime
        self._reset_instruction = reset_instruction
        self._message_timeout = message_timeout_seconds
        self._reset_timeout = reset_timeout_seconds
        self._locks = SessionLocks() if serialize_per_session else None

    @classmethod
    def from_settings(
        cls,
        runtime: AgentRuntimeProtocol,
        settings: RuntimeSettings,
    ) -> Dispatcher:
        return cls(
            runtime,
            reset_instruction=settings.reset_instruction,
            message_timeout_seconds=settings.message_timeout_seconds,
            reset_timeout_seconds=settings.reset_timeout_seconds,
            serialize_per_session=settings.serialize_per_session,
        )

    async def dispatch_message(
        self,
        session_ref: SessionReference,
        text: str,
        timeout: float | None = None,
    ) -> str:
        """Despacha mensagem e retorna a saída do agente (trim).

        Raises:
            DispatchFailure: Runtime falhou ou excedeu o timeout.
        """
        output = await self._invoke(
            session_ref,
            text,
            timeout or self._message_timeout,
            operation="message",
        )
        return output.strip()

    async def dispatch_reset(
        self,
        session_ref: SessionReference,
        timeout: float | None = None,
    ) -> bool:
        """Envia a instrução fixa de reset à sessão.

        Raises:
            DispatchFailure: Runtime falhou ou excedeu o timeout.
        """
        await self._invoke(
            session_ref,
            self._reset_instruction,
            timeout or self._reset_timeout,
            operation="reset",
        )
        return True

    async def _invoke(
        self,
        session_ref: SessionReference,
        text: str,
        timeout: float,
        *,
        operation: str,
    ) -> str:
        logger.info(
            "dispatch_started",
            extra={
                "operation": operation,
                "session_key": session_ref.session_key,
                "timeout_seconds": timeout,
            },
        )
        started_at = time.perf_counter()
        try:
            async with self._guard(session_ref.session_key):
                return await self._runtime.invoke(
                    session_ref.session_handle,
                    text,
                    timeout,
                )
        except AgentRuntimeError as exc:
            logger.error(
                "dispatch_failed",
                extra={
                    "operation": operation,
                    "session_key": session_ref.session_key,
                    "timed_out": exc.timed_out,
                    "error": exc.cause,
                },
            )
            raise DispatchFailure(exc.cause) from exc
        finally:
            record_latency(
                "dispatcher",
                operation,
                (time.perf_counter() - started_at) * 1000,
            )

    def _guard(self, session_key: str) -> contextlib.AbstractAsyncContextManager[None]:
        if self._locks is None:
            return contextlib.nullcontext()
        return self._locks.hold(session_key)
