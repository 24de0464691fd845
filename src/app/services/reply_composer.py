"""Composição das respostas de email (texto + HTML + threading).

Regras:
- resposta vazia ou igual à sentinela (após trim) é suprimida;
- assunto recebe prefixo "Re:" quando ainda não tem;
- texto puro preserva as quebras de linha e recebe a assinatura;
- HTML troca cada "\\n" por exatamente um <br>;
- In-Reply-To aponta para o message_id original quando existir.

O reconhecimento de reset e o pedido de desculpas nunca são suprimidos.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from app.protocols.models import OutboundReply
from config.settings.resend import DEFAULT_SIGNATURE
from config.settings.runtime import DEFAULT_SUPPRESSION_SENTINEL

if TYPE_CHECKING:
    from app.protocols.models import InboundMessage

REPLY_PREFIX = "Re:"
RESET_ACK_TEXT = "Sessão reiniciada."
APOLOGY_TEMPLATE = "Desculpe, ocorreu um problema ao processar seu email.\n\nErro: {cause}"


def reply_subject(subject: str) -> str:
    """Prefixa "Re: " se o assunto ainda não começa com "Re:"."""
    if subject.startswith(REPLY_PREFIX):
        return subject
    return f"{REPLY_PREFIX} {subject}"


def render_html(text: str, signature: str | None) -> str:
    """Corpo HTML: texto escapado com \\n -> <br>, assinatura em parágrafo próprio."""
    body = html.escape(text, quote=False).replace("\n", "<br>")
    rendered = f"<p>{body}</p>"
    if signature:
        rendered += f"<p>{html.escape(signature, quote=False)}</p>"
    return rendered


def render_text(text: str, signature: str | None) -> str:
    """Corpo texto puro com a assinatura anexada."""
    if not signature:
        return text
    return f"{text}\n\n{signature}"


def is_suppressed(reply_text: str | None, sentinel: str = DEFAULT_SUPPRESSION_SENTINEL) -> bool:
    """True se a saída do agente significa "não responder"."""
    stripped = (reply_text or "").strip()
    return not stripped or stripped == sentinel


class ReplyComposer:
    """Monta OutboundReply a partir da mensagem original."""

    __slots__ = ("_apology_template", "_reset_ack_text", "_sentinel", "_signature")

    def __init__(
        self,
        *,
        signature: str | None = DEFAULT_SIGNATURE,
        sentinel: str = DEFAULT_SUPPRESSION_SENTINEL,
        reset_ack_text: str = RESET_ACK_TEXT,
        apology_template: str = APOLOGY_TEMPLATE,
    ) -> None:
        self._signature = signature
        self._sentinel = sentinel
        self._reset_ack_text = reset_ack_text
        self._apology_template = apology_template

    def compose(self, original: InboundMessage, reply_text: str) -> OutboundReply | None:
        """Resposta do agente, ou None quando suprimida."""
        if is_suppressed(reply_text, self._sentinel):
            return None
        return self._build(original, reply_text)

    def compose_reset_ack(self, original: InboundMessage) -> OutboundReply:
        return self._build(original, self._reset_ack_text)

    def compose_apology(self, original: InboundMessage, cause: str) -> OutboundReply:
        return self._build(original, self._apology_template.format(cause=cause))

    def _build(self, original: InboundMessage, text: str) -> OutboundReply:
        return OutboundReply(
            to=original.sender_address,
            subject=reply_subject(original.subject),
            text_body=render_text(text, self._signature),
            html_body=render_html(text, self._signature),
            in_reply_to=original.message_id or None,
            signature=self._signature,
        )
