"""Mascaramento de endereços de email para logs."""

from __future__ import annotations


def mask_address(address: str | None) -> str:
    """Mascara a parte local de um endereço mantendo o domínio.

    >>> mask_address("alice@example.com")
    'a***@example.com'
    """
    if not address:
        return ""
    local, sep, domain = address.strip().partition("@")
    if not sep:
        return "***"
    head = local[:1]
    return f"{head}***@{domain}"
