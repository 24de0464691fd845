"""Webhook inbound AgentMail."""

from .receive import InvalidJsonError, WebhookRequestError, parse_webhook_request

__all__ = [
    "InvalidJsonError",
    "WebhookRequestError",
    "parse_webhook_request",
]
