"""Normalizer AgentMail: converte o webhook para InboundMessage."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from app.protocols.models import InboundMessage
from config.settings.agentmail import MESSAGE_RECEIVED_EVENT
from utils.errors import MalformedInboundError

from .extractor import extract_recipients, extract_sender
from .models import AgentMailMessage

DEFAULT_SUBJECT = "(sem assunto)"


def normalize_event(
    payload: dict[str, Any],
    event_type: str = MESSAGE_RECEIVED_EVENT,
) -> InboundMessage | None:
    """Normaliza um evento do webhook.

    Returns:
        InboundMessage, ou None se o evento não for de mensagem recebida

    Raises:
        MalformedInboundError: Mensagem estruturalmente inválida ou sem remetente
    """
    raw_message = payload.get("message")
    if payload.get("event_type") != event_type or not raw_message:
        return None

    try:
        message = AgentMailMessage.model_validate(raw_message)
    except ValidationError as exc:
        raise MalformedInboundError(_describe(exc)) from exc

    address, name = extract_sender(message.from_)
    if not address:
        raise MalformedInboundError("payload inválido: message.from ausente")

    return InboundMessage(
        sender_address=address,
        sender_name=name,
        subject=message.subject or DEFAULT_SUBJECT,
        text=message.text or "",
        preview=message.preview,
        message_id=message.message_id,
        in_reply_to=message.in_reply_to,
        recipients=extract_recipients(message.to),
        timestamp=message.timestamp or datetime.now(UTC).isoformat(),
    )


def _describe(exc: ValidationError) -> str:
    fields = sorted({".".join(str(p) for p in err["loc"]) or "message" for err in exc.errors()})
    return f"payload inválido: {', '.join(fields)}"


class AgentMailNormalizer:
    """Implementação de InboundNormalizerProtocol para AgentMail."""

    __slots__ = ("_event_type",)

    def __init__(self, event_type: str = MESSAGE_RECEIVED_EVENT) -> None:
        self._event_type = event_type

    def normalize(self, payload: dict[str, Any]) -> InboundMessage | None:
        return normalize_event(payload, self._event_type)
