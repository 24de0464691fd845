"""Builder do corpo JSON de envio da Resend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.models import OutboundReply

IN_REPLY_TO_HEADER = "In-Reply-To"


def build_email_payload(reply: OutboundReply, from_email: str) -> dict[str, Any]:
    """Constrói payload para POST /emails.

    Args:
        reply: Resposta composta
        from_email: Remetente verificado na Resend

    Returns:
        {from, to: [addr], subject, text, html, headers?}
    """
    payload: dict[str, Any] = {
        "from": from_email,
        "to": [reply.to],
        "subject": reply.subject,
        "text": reply.text_body,
        "html": reply.html_body,
    }
    if reply.in_reply_to:
        payload["headers"] = {IN_REPLY_TO_HEADER: reply.in_reply_to}
    return payload


class ResendEmailPayloadBuilder:
    """Builder com remetente fixo, injetado no adapter de envio."""

    __slots__ = ("_from_email",)

    def __init__(self, from_email: str) -> None:
        self._from_email = from_email

    def build(self, reply: OutboundReply) -> dict[str, Any]:
        return build_email_payload(reply, self._from_email)
