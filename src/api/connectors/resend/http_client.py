"""Cliente HTTP da API Resend (envio transacional).

Estende HttpClient genérico com:
- Bearer token validado antes do envio
- Tradução de respostas não-2xx em ResendApiError
- Corpo 2xx não-JSON devolvido como {"success": True, "raw": body}
- Logging estruturado sem PII (endereços mascarados, sem corpo)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpClient, HttpClientConfig
from api.connectors.resend.errors import ResendApiError, parse_resend_error
from app.observability import record_latency

if TYPE_CHECKING:
    import httpx

    from config.settings import ResendSettings

logger: logging.Logger = logging.getLogger(__name__)


class ResendHttpClient(HttpClient):
    """Cliente para POST {base}/emails."""

    def __init__(
        self,
        api_key: str,
        emails_endpoint: str,
        config: HttpClientConfig | None = None,
    ) -> None:
        super().__init__(config)
        self._api_key = api_key
        self._emails_endpoint = emails_endpoint

    async def send_email(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Envia um email já montado.

        Raises:
            ValueError: api_key ausente
            ResendApiError: Resposta não-2xx
            HttpError: Falha de conexão/timeout
        """
        if not self._api_key or not self._api_key.strip():
            raise ValueError(
                "api_key é obrigatório para envio. "
                "Verifique se RESEND_API_KEY está configurado."
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        started_at = time.perf_counter()
        try:
            response = await self.post(self._emails_endpoint, json=payload, headers=headers)
        finally:
            record_latency("resend", "send_email", (time.perf_counter() - started_at) * 1000)
        return self._process_response(response)

    def _process_response(self, response: httpx.Response) -> dict[str, Any]:
        body = response.text
        try:
            data: Any = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = parse_resend_error(data, body)
            logger.warning(
                "resend_send_failed",
                extra={"status_code": response.status_code, "error": message},
            )
            raise ResendApiError(response.status_code, message)

        if not isinstance(data, dict):
            return {"success": True, "raw": body}

        logger.debug(
            "resend_send_succeeded",
            extra={"status_code": response.status_code, "email_id": data.get("id")},
        )
        return data


def create_resend_http_client(
    settings: ResendSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ResendHttpClient:
    """Factory do cliente Resend com settings do ambiente."""
    from config.settings import get_resend_settings

    resend = settings or get_resend_settings()
    config = HttpClientConfig(
        timeout_seconds=resend.request_timeout_seconds,
        max_retries=resend.max_retries,
        transport=transport,
    )
    return ResendHttpClient(
        api_key=resend.api_key,
        emails_endpoint=resend.emails_endpoint,
        config=config,
    )
