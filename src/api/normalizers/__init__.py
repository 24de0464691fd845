"""Normalizers por provedor: conversão de payloads externos para modelos internos.

Estrutura:
- agentmail/: webhook message.received -> InboundMessage
"""

from .agentmail import AgentMailNormalizer, normalize_event

__all__ = [
    "AgentMailNormalizer",
    "normalize_event",
]
