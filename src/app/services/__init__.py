"""Serviços de aplicação.

Unidades reutilizáveis do pipeline de email (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.command_interpreter import classify
from app.services.dispatcher import Dispatcher, SessionLocks
from app.services.identity_resolver import (
    IdentityResolver,
    find_ambiguous_addresses,
    match_identity,
    normalize_address,
)
from app.services.mail_envelope import build_message_envelope
from app.services.reply_composer import ReplyComposer, is_suppressed, reply_subject
from app.services.session_locator import SessionLocator, build_session_key

__all__ = [
    "Dispatcher",
    "IdentityResolver",
    "ReplyComposer",
    "SessionLocator",
    "SessionLocks",
    "build_message_envelope",
    "build_session_key",
    "classify",
    "find_ambiguous_addresses",
    "is_suppressed",
    "match_identity",
    "normalize_address",
    "reply_subject",
]
