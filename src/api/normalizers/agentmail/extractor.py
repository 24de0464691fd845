"""Extração de campos do payload AgentMail.

Não faz validação de negócio, apenas extração estrutural do remetente
e dos destinatários.
"""

from __future__ import annotations

import re
from typing import Any

_NAMED_ADDRESS = re.compile(r"<([^>]+)>")


def extract_sender(raw: Any) -> tuple[str, str]:
    """Extrai (endereço, nome) do campo remetente.

    Aceita string ("Nome <addr>" ou endereço puro), objeto com
    email/address e name, ou lista de qualquer um deles (usa o primeiro).
    Endereço sai em minúsculas; nome cai para o endereço quando ausente.
    """
    if isinstance(raw, list):
        raw = raw[0] if raw else None

    if isinstance(raw, dict):
        address = str(raw.get("email") or raw.get("address") or "").strip().lower()
        name = str(raw.get("name") or "").strip()
        return address, name or address

    if isinstance(raw, str):
        match = _NAMED_ADDRESS.search(raw)
        if match:
            address = match.group(1).strip().lower()
            name = raw.split("<", 1)[0].strip().strip('"').strip()
            return address, name or address
        address = raw.strip().lower()
        return address, raw.strip()

    return "", ""


def extract_recipients(raw: Any) -> tuple[str, ...]:
    """Destinatários como tupla de endereços (minúsculos)."""
    if raw is None:
        return ()
    items = raw if isinstance(raw, list) else [raw]
    recipients: list[str] = []
    for item in items:
        address, _ = extract_sender(item)
        if address:
            recipients.append(address)
    return tuple(recipients)
