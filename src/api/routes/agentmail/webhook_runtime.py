"""Runtime helpers para processamento do webhook AgentMail.

Modo `inline` (padrão): a resposta HTTP carrega o resultado do pipeline.
Modo `async`: a mensagem é validada na hora e processada em background.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.routes.agentmail.webhook_runtime_tasks import (
    drain_processing_tasks,
    schedule_processing_task,
)
from app.coordinators.mail.inbound import process_inbound_event, process_inbound_message

if TYPE_CHECKING:
    from app.protocols.models import InboundMessage
    from app.protocols.normalizer import InboundNormalizerProtocol
    from app.use_cases.mail import ProcessInboundMailUseCase
    from config.settings import AgentMailSettings

logger = logging.getLogger(__name__)


def get_inbound_use_case() -> ProcessInboundMailUseCase:
    """Obtém o pipeline de email (lazy-loading via bootstrap)."""
    from app.bootstrap import get_inbound_mail_use_case

    return get_inbound_mail_use_case()


def get_inbound_normalizer() -> InboundNormalizerProtocol:
    from app.bootstrap import get_inbound_normalizer as _get_normalizer

    return _get_normalizer()


def ignored_event_response(payload: dict[str, Any]) -> dict[str, Any]:
    """Resposta para eventos que não são de mensagem recebida."""
    return {"ok": True, "processed": False, "type": payload.get("event_type")}


async def dispatch_inbound_processing(
    *,
    payload: dict[str, Any],
    correlation_id: str,
    settings: AgentMailSettings,
) -> dict[str, Any]:
    """Despacha processamento inline ou async conforme configuração.

    Raises:
        MalformedInboundError: Mensagem estruturalmente inválida
    """
    use_case = get_inbound_use_case()
    normalizer = get_inbound_normalizer()

    if settings.webhook_processing_mode == "async":
        message = normalizer.normalize(payload)
        if message is None:
            return ignored_event_response(payload)
        schedule_processing_task(
            correlation_id=correlation_id,
            coroutine=process_inbound_message_safe(
                message=message,
                correlation_id=correlation_id,
                use_case=use_case,
            ),
        )
        return {"ok": True, "accepted": True}

    result = await process_inbound_event(payload, correlation_id, use_case, normalizer)
    if result is None:
        return ignored_event_response(payload)
    logger.info(
        "webhook_processing_completed",
        extra={
            "channel": "agentmail",
            "correlation_id": correlation_id,
            "mode": "inline",
        },
    )
    return {"ok": True, **result.to_dict()}


async def process_inbound_message_safe(
    *,
    message: InboundMessage,
    correlation_id: str,
    use_case: ProcessInboundMailUseCase,
) -> None:
    """Executa o pipeline em background; falhas inesperadas são logadas e propagadas."""
    try:
        await process_inbound_message(message, correlation_id, use_case)
    except Exception:
        logger.exception(
            "webhook_processing_failed",
            extra={
                "channel": "agentmail",
                "correlation_id": correlation_id,
            },
        )
        raise


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks async pendentes durante shutdown do processo."""
    await drain_processing_tasks(timeout_seconds=timeout_seconds)
