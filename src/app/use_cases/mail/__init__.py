"""Use cases do pipeline de email."""

from .process_inbound_mail import UNKNOWN_SENDER_ERROR, ProcessInboundMailUseCase

__all__ = [
    "UNKNOWN_SENDER_ERROR",
    "ProcessInboundMailUseCase",
]
