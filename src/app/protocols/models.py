"""Modelos internos do pipeline de email (imutáveis)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class MailCommand(StrEnum):
    """Classificação de uma mensagem inbound."""

    RESET = "RESET"
    FORWARD = "FORWARD"


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """Email recebido, já normalizado a partir do webhook.

    Attributes:
        sender_address: Endereço do remetente (minúsculo)
        sender_name: Nome de exibição (ou o próprio endereço)
        subject: Assunto
        text: Corpo em texto puro (pode ser vazio)
        message_id: ID atribuído pelo provedor inbound
        timestamp: Momento do recebimento (ISO 8601)
        preview: Prévia do corpo fornecida pelo provedor
        in_reply_to: ID da mensagem respondida, se houver
        recipients: Destinatários originais
    """

    sender_address: str
    sender_name: str
    subject: str
    text: str
    message_id: str | None
    timestamp: str
    preview: str | None = None
    in_reply_to: str | None = None
    recipients: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class SessionReference:
    """Chave determinística da sessão + handle opaco do runtime."""

    session_key: str
    session_handle: str


@dataclass(frozen=True, slots=True)
class OutboundReply:
    """Resposta pronta para envio pelo provedor outbound."""

    to: str
    subject: str
    text_body: str
    html_body: str
    in_reply_to: str | None = None
    signature: str | None = None


@dataclass(frozen=True, slots=True)
class InboundMailResult:
    """Resultado do processamento de uma mensagem inbound.

    Attributes:
        success: False para remetente desconhecido ou falha no forward
        user_id: Identidade resolvida (None se desconhecido)
        reset: True quando a mensagem era o comando de reset
        has_reply: True quando uma resposta (não pedido de desculpas) foi enviada
        error: Causa legível da falha
        final_state: Estado final da FSM do pipeline
    """

    success: bool
    user_id: str | None = None
    reset: bool = False
    has_reply: bool = False
    error: str | None = None
    final_state: str = "DONE"

    def to_dict(self) -> dict[str, Any]:
        """Corpo JSON devolvido ao webhook."""
        payload: dict[str, Any] = {"success": self.success}
        if self.reset:
            payload["reset"] = True
        elif self.success and self.user_id is not None:
            payload["userId"] = self.user_id
            payload["hasReply"] = self.has_reply
        if self.error is not None:
            payload["error"] = self.error
        return payload
