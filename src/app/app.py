"""Entrypoint da aplicação Mailbridge.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8789

Uso (desenvolvimento):
    python -m app.app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.agentmail.webhook_runtime import drain_background_tasks
from api.routes.agentmail.webhook_runtime_tasks import configure_task_limit
from app.bootstrap import (
    get_identity_resolver,
    initialize_app,
    log_identity_overview,
    validate_runtime_settings,
)
from config.logging import get_logger
from config.settings import (
    get_agentmail_settings,
    get_base_settings,
    get_resend_settings,
)
from utils.errors import ConfigLoadFailure

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (fatal em staging/production)
    - Loga identidades configuradas e vínculos ambíguos

    Shutdown:
    - Aguarda tasks de webhook pendentes (modo async)
    """
    base = get_base_settings()
    logger.info(
        "app_starting",
        extra={
            "service": base.service_name,
            "environment": base.environment,
            "receive": "AgentMail",
            "send": "Resend",
            "from_email": get_resend_settings().from_email,
        },
    )
    try:
        validate_runtime_settings()
    except ConfigLoadFailure:
        logger.critical("app_startup_aborted", extra={"service": base.service_name})
        raise

    agentmail = get_agentmail_settings()
    configure_task_limit(agentmail.max_concurrent_tasks)
    log_identity_overview(get_identity_resolver())

    yield

    logger.info("app_shutting_down", extra={"service": base.service_name})
    await drain_background_tasks(timeout_seconds=agentmail.shutdown_drain_seconds)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="Mailbridge",
        description="Ponte entre email (AgentMail/Resend) e sessões de agente",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    base = get_base_settings()
    logger.info("app_listening", extra={"port": base.port, "environment": base.environment})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=base.port,
        reload=base.is_development and base.debug,
    )


if __name__ == "__main__":
    main()
