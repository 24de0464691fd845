"""Protocolo de invocação do runtime de agente."""

from __future__ import annotations

from typing import Protocol


class AgentRuntimeError(Exception):
    """Runtime terminou com falha ou excedeu o timeout."""

    def __init__(self, cause: str, *, timed_out: bool = False) -> None:
        super().__init__(cause)
        self.cause = cause
        self.timed_out = timed_out


class AgentRuntimeProtocol(Protocol):
    """Contrato mínimo: entrega texto a uma sessão e devolve a saída textual."""

    async def invoke(
        self,
        session_handle: str,
        message: str,
        timeout_seconds: float,
    ) -> str: ...
