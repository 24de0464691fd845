"""Processamento inbound: normaliza o evento do webhook e executa o pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.models import InboundMailResult, InboundMessage
    from app.protocols.normalizer import InboundNormalizerProtocol
    from app.use_cases.mail import ProcessInboundMailUseCase

logger = logging.getLogger(__name__)


async def process_inbound_message(
    message: InboundMessage,
    correlation_id: str,
    use_case: ProcessInboundMailUseCase,
) -> InboundMailResult:
    """Executa o pipeline para uma mensagem já normalizada.

    Sem logs com PII: apenas identidade, flags e estado final.
    """
    result = await use_case.execute(message, correlation_id=correlation_id)

    logger.info(
        "inbound_processed",
        extra={
            "message_id": message.message_id,
            "success": result.success,
            "reset": result.reset,
            "has_reply": result.has_reply,
            "final_state": result.final_state,
        },
    )
    return result


async def process_inbound_event(
    payload: dict[str, Any],
    correlation_id: str,
    use_case: ProcessInboundMailUseCase,
    normalizer: InboundNormalizerProtocol,
) -> InboundMailResult | None:
    """Processa um evento do webhook inbound.

    Args:
        payload: Corpo do webhook já decodificado
        correlation_id: ID de correlação para rastreamento
        use_case: Pipeline injetado
        normalizer: Normalizador do provedor inbound

    Returns:
        InboundMailResult, ou None quando o evento não é de mensagem recebida

    Raises:
        MalformedInboundError: Evento reconhecido com mensagem inválida
    """
    message = normalizer.normalize(payload)
    if message is None:
        logger.info(
            "inbound_event_ignored",
            extra={"event_type": payload.get("event_type")},
        )
        return None
    return await process_inbound_message(message, correlation_id, use_case)
