"""Endpoint de webhook do AgentMail.

Endpoints:
- POST /webhook/agentmail: recebimento de eventos inbound

Respostas:
- 200 com o resultado do pipeline (ou processed=false para outros eventos)
- 400 para JSON inválido ou mensagem malformada
- 500 para falha inesperada
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.agentmail.webhook import InvalidJsonError, parse_webhook_request
from api.routes.agentmail.webhook_runtime import dispatch_inbound_processing
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.settings import get_agentmail_settings
from utils.errors import MalformedInboundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook/agentmail", response_model=None)
async def receive_webhook(request: Request) -> JSONResponse:
    """Recebimento de eventos inbound do AgentMail."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        raw_body = await request.body()
        try:
            payload = parse_webhook_request(raw_body)
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"channel": "agentmail", "error": str(exc)},
            )
            return JSONResponse(
                content={"error": str(exc)},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "agentmail",
                "event_type": payload.get("event_type"),
                "payload_size": len(raw_body),
            },
        )

        try:
            body = await dispatch_inbound_processing(
                payload=payload,
                correlation_id=get_correlation_id(),
                settings=get_agentmail_settings(),
            )
        except MalformedInboundError as exc:
            logger.warning(
                "webhook_message_malformed",
                extra={"channel": "agentmail", "error": str(exc)},
            )
            return JSONResponse(
                content={"error": str(exc)},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except Exception as exc:
            logger.exception(
                "webhook_processing_failed",
                extra={"channel": "agentmail"},
            )
            return JSONResponse(
                content={"error": str(exc)},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return JSONResponse(content=body, status_code=status.HTTP_200_OK)
    finally:
        reset_correlation_id(token)
