"""Erros e helpers de parsing para a API Resend."""

from __future__ import annotations

from typing import Any

from api.connectors.http_base import HttpError


class ResendApiError(HttpError):
    """Resposta não-2xx da API Resend (status + mensagem do provedor)."""

    def __init__(self, status_code: int, provider_message: str) -> None:
        super().__init__(
            f"Resend API error: {status_code} - {provider_message}",
            status_code=status_code,
        )
        self.provider_message = provider_message


def parse_resend_error(response_data: Any, fallback: str) -> str:
    """Extrai a mensagem de erro do corpo da Resend.

    Formato típico: {"statusCode": 422, "name": "...", "message": "..."}
    """
    if isinstance(response_data, dict):
        message = response_data.get("message") or response_data.get("error")
        if isinstance(message, dict):
            message = message.get("message")
        if message:
            return str(message)
    return fallback or "Erro desconhecido"
