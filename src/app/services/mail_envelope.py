"""Envelope textual entregue ao agente para cada email encaminhado.

O agente recebe cabeçalho (remetente, identidade, assunto), o corpo e a
instrução de resposta com a sentinela de supressão.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from config.settings.runtime import DEFAULT_SUPPRESSION_SENTINEL

if TYPE_CHECKING:
    from app.protocols.models import InboundMessage

EMPTY_BODY_PLACEHOLDER = "(sem corpo)"
SEPARATOR = "---"


def message_body(message: InboundMessage) -> str:
    """Corpo do email: texto, senão prévia, senão placeholder."""
    for candidate in (message.text, message.preview):
        if candidate and candidate.strip():
            return candidate
    return EMPTY_BODY_PLACEHOLDER


def build_message_envelope(
    message: InboundMessage,
    identity: str,
    sentinel: str = DEFAULT_SUPPRESSION_SENTINEL,
) -> str:
    parts = [
        f"📧 Email recebido de {message.sender_name} ({identity}) <{message.sender_address}>",
        f"Assunto: {message.subject}",
        SEPARATOR,
        message_body(message),
        SEPARATOR,
        (
            "[IMPORTANTE] Se este email precisar de resposta, responda diretamente. "
            f"Sua resposta será enviada para: {message.sender_address}"
        ),
        f"Se não precisar responder, responda apenas {sentinel}.",
    ]
    return "\n\n".join(parts)
