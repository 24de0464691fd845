"""Factories de dependências: criação das implementações concretas.

Este módulo centraliza a criação de stores, runtime, sender e do use
case do pipeline a partir das settings do ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.resend import create_resend_http_client
from api.normalizers.agentmail import AgentMailNormalizer
from app.bootstrap.adapters import ResendReplySender
from app.infra.runtime import create_cli_agent_runtime
from app.infra.stores import JsonIdentityLinkStore, JsonSessionRegistry
from app.services.dispatcher import Dispatcher
from app.services.identity_resolver import IdentityResolver
from app.services.reply_composer import ReplyComposer
from app.services.session_locator import SessionLocator
from app.use_cases.mail import ProcessInboundMailUseCase
from config.settings import (
    get_agentmail_settings,
    get_resend_settings,
    get_runtime_settings,
)

if TYPE_CHECKING:
    from app.protocols.agent_runtime import AgentRuntimeProtocol
    from app.protocols.identity_store import IdentityLinkStoreProtocol
    from app.protocols.reply_sender import ReplySenderProtocol
    from app.protocols.session_registry import SessionRegistryProtocol
    from config.settings import ResendSettings, RuntimeSettings

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Stores
# ──────────────────────────────────────────────────────────────────────────────


def create_identity_store(
    settings: RuntimeSettings | None = None,
) -> IdentityLinkStoreProtocol:
    runtime = settings or get_runtime_settings()
    logger.info("identity_store_created", extra={"backend": "json"})
    return JsonIdentityLinkStore(runtime.identity_config_path)


def create_session_registry(
    settings: RuntimeSettings | None = None,
) -> SessionRegistryProtocol:
    runtime = settings or get_runtime_settings()
    logger.info("session_registry_created", extra={"backend": "json"})
    return JsonSessionRegistry(runtime.session_registry_path)


# ──────────────────────────────────────────────────────────────────────────────
# Serviços do pipeline
# ──────────────────────────────────────────────────────────────────────────────


def create_identity_resolver(
    store: IdentityLinkStoreProtocol | None = None,
) -> IdentityResolver:
    return IdentityResolver(store or create_identity_store())


def create_reply_sender(settings: ResendSettings | None = None) -> ReplySenderProtocol:
    resend = settings or get_resend_settings()
    return ResendReplySender(create_resend_http_client(resend), resend.from_email)


def create_inbound_mail_use_case(
    *,
    runtime_settings: RuntimeSettings | None = None,
    resend_settings: ResendSettings | None = None,
    identity_store: IdentityLinkStoreProtocol | None = None,
    session_registry: SessionRegistryProtocol | None = None,
    agent_runtime: AgentRuntimeProtocol | None = None,
    sender: ReplySenderProtocol | None = None,
) -> ProcessInboundMailUseCase:
    """Monta o pipeline completo. Qualquer colaborador pode ser injetado."""
    runtime = runtime_settings or get_runtime_settings()
    resend = resend_settings or get_resend_settings()

    return ProcessInboundMailUseCase(
        resolver=create_identity_resolver(identity_store or create_identity_store(runtime)),
        locator=SessionLocator(
            session_registry or create_session_registry(runtime),
            runtime.session_namespace,
        ),
        dispatcher=Dispatcher.from_settings(
            agent_runtime or create_cli_agent_runtime(runtime),
            runtime,
        ),
        composer=ReplyComposer(
            signature=resend.signature,
            sentinel=runtime.suppression_sentinel,
        ),
        sender=sender or create_reply_sender(resend),
        control_token=runtime.control_token,
        sentinel=runtime.suppression_sentinel,
    )


def create_agentmail_normalizer() -> AgentMailNormalizer:
    return AgentMailNormalizer(get_agentmail_settings().received_event_type)
