"""Protocolos de normalização inbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import InboundMessage


class InboundNormalizerProtocol(Protocol):
    """Converte payload de webhook em InboundMessage.

    Retorna None para tipos de evento não reconhecidos e levanta
    MalformedInboundError para payload estruturalmente inválido.
    """

    def normalize(self, payload: dict[str, Any]) -> InboundMessage | None: ...
