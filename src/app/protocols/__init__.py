"""Protocolos e contratos do core da aplicação."""

from .agent_runtime import AgentRuntimeError, AgentRuntimeProtocol
from .identity_store import IdentityLinkStoreProtocol
from .models import (
    InboundMailResult,
    InboundMessage,
    MailCommand,
    OutboundReply,
    SessionReference,
)
from .normalizer import InboundNormalizerProtocol
from .reply_sender import ReplySenderProtocol
from .session_registry import SessionRegistryProtocol

__all__ = [
    "AgentRuntimeError",
    "AgentRuntimeProtocol",
    "IdentityLinkStoreProtocol",
    "InboundMailResult",
    "InboundMessage",
    "InboundNormalizerProtocol",
    "MailCommand",
    "OutboundReply",
    "ReplySenderProtocol",
    "SessionReference",
    "SessionRegistryProtocol",
]
