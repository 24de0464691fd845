"""Coordenação do fluxo inbound de email."""

from .handler import process_inbound_event, process_inbound_message

__all__ = [
    "process_inbound_event",
    "process_inbound_message",
]
