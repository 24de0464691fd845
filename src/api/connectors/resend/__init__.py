"""Connector Resend (envio de respostas por email)."""

from .errors import ResendApiError, parse_resend_error
from .http_client import ResendHttpClient, create_resend_http_client

__all__ = [
    "ResendApiError",
    "ResendHttpClient",
    "create_resend_http_client",
    "parse_resend_error",
]
