"""Adapters concretos de borda (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpError
from api.payload_builders.resend import ResendEmailPayloadBuilder
from config.logging import mask_address
from utils.errors import ReplySendFailure

if TYPE_CHECKING:
    from api.connectors.resend import ResendHttpClient
    from app.protocols.models import OutboundReply

logger = logging.getLogger(__name__)


class ResendReplySender:
    """Implementa ReplySenderProtocol sobre o cliente HTTP da Resend."""

    def __init__(self, client: ResendHttpClient, from_email: str) -> None:
        self._client = client
        self._builder = ResendEmailPayloadBuilder(from_email)

    async def send(self, reply: OutboundReply) -> dict[str, Any]:
        """Envia a resposta.

        Raises:
            ReplySendFailure: Erro HTTP, resposta não-2xx ou api_key ausente
        """
        payload = self._builder.build(reply)
        try:
            response = await self._client.send_email(payload)
        except (HttpError, ValueError) as exc:
            logger.error(
                "reply_send_failed",
                extra={
                    "to": mask_address(reply.to),
                    "error_type": type(exc).__name__,
                    "status_code": getattr(exc, "status_code", None),
                },
            )
            raise ReplySendFailure(str(exc)) from exc

        logger.info(
            "reply_sent_to_resend",
            extra={
                "to": mask_address(reply.to),
                "email_id": response.get("id"),
                "threaded": reply.in_reply_to is not None,
            },
        )
        return response
