"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigLoadFailure,
    DispatchFailure,
    InfrastructureError,
    MailbridgeError,
    MalformedInboundError,
    ReplySendFailure,
    SessionNotFoundError,
    StoreUnavailableError,
)

__all__ = [
    "ConfigLoadFailure",
    "DispatchFailure",
    "InfrastructureError",
    "MailbridgeError",
    "MalformedInboundError",
    "ReplySendFailure",
    "SessionNotFoundError",
    "StoreUnavailableError",
]
