"""Classificação de comandos de controle no assunto do email."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.models import MailCommand
from config.settings.runtime import DEFAULT_CONTROL_TOKEN

if TYPE_CHECKING:
    from app.protocols.models import InboundMessage


def classify(message: InboundMessage, control_token: str = DEFAULT_CONTROL_TOKEN) -> MailCommand:
    """RESET se o assunto (trim) for exatamente o token; senão FORWARD.

    Comparação sensível a maiúsculas. O corpo nunca é inspecionado.
    """
    if (message.subject or "").strip() == control_token:
        return MailCommand.RESET
    return MailCommand.FORWARD
