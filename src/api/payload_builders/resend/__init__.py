"""Payload builders da Resend."""

from .email import IN_REPLY_TO_HEADER, ResendEmailPayloadBuilder, build_email_payload

__all__ = [
    "IN_REPLY_TO_HEADER",
    "ResendEmailPayloadBuilder",
    "build_email_payload",
]
