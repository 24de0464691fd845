"""Protocolo de envio de respostas por email."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import OutboundReply


class ReplySenderProtocol(Protocol):
    """Envia uma resposta composta. Levanta ReplySendFailure em erro."""

    async def send(self, reply: OutboundReply) -> dict[str, Any]: ...
