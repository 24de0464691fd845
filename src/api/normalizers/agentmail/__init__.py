"""Normalizer AgentMail: webhook message.received -> InboundMessage.

Responsabilidades:
- Validar a estrutura do evento (pydantic)
- Extrair remetente em qualquer das formas aceitas pelo provedor
- Aplicar defaults (assunto, timestamp)
"""

from .extractor import extract_recipients, extract_sender
from .models import AgentMailMessage
from .normalizer import DEFAULT_SUBJECT, AgentMailNormalizer, normalize_event

__all__ = [
    "DEFAULT_SUBJECT",
    "AgentMailMessage",
    "AgentMailNormalizer",
    "extract_recipients",
    "extract_sender",
    "normalize_event",
]
