"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_inbound_mail_use_case

    initialize_app()
    use_case = get_inbound_mail_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_agentmail_settings,
    get_base_settings,
    get_resend_settings,
    get_runtime_settings,
)
from utils.errors import ConfigLoadFailure

if TYPE_CHECKING:
    from api.normalizers.agentmail import AgentMailNormalizer
    from app.services.identity_resolver import IdentityResolver
    from app.use_cases.mail import ProcessInboundMailUseCase

DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        ConfigLoadFailure: Configuração inválida em ambiente estrito
    """
    base = get_base_settings()
    environment = base.environment
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"agentmail: {error}" for error in get_agentmail_settings().validate())
    errors.extend(f"resend: {error}" for error in get_resend_settings().validate())
    errors.extend(f"runtime: {error}" for error in get_runtime_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise ConfigLoadFailure(f"Configuração inválida para {environment}:\n{details}")


def log_identity_overview(resolver: IdentityResolver) -> None:
    """Loga identidades configuradas e endereços ambíguos (primeira vence)."""
    identities = resolver.configured_identities()
    logger.info(
        "identities_configured",
        extra={"component": "bootstrap", "identities": identities, "count": len(identities)},
    )
    ambiguous = resolver.ambiguous_addresses()
    if ambiguous:
        logger.warning(
            "identity_links_ambiguous",
            extra={
                "component": "bootstrap",
                "owners": list(ambiguous.values()),
                "count": len(ambiguous),
            },
        )


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_inbound_mail_use_case() -> ProcessInboundMailUseCase:
    """Pipeline de email (singleton)."""
    from app.bootstrap.dependencies import create_inbound_mail_use_case

    return create_inbound_mail_use_case()


@lru_cache(maxsize=1)
def get_inbound_normalizer() -> AgentMailNormalizer:
    """Normalizador AgentMail (singleton)."""
    from app.bootstrap.dependencies import create_agentmail_normalizer

    return create_agentmail_normalizer()


@lru_cache(maxsize=1)
def get_identity_resolver() -> IdentityResolver:
    """Resolver usado nos logs de startup (singleton)."""
    from app.bootstrap.dependencies import create_identity_resolver

    return create_identity_resolver()
