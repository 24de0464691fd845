"""Resolução de remetente de email para identidade interna.

A tabela de vínculos é lida do store a cada chamada (sem cache). Em caso de
endereço reivindicado por mais de uma identidade, vence a primeira na ordem
de iteração da tabela.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.identity_store import IdentityLinkStoreProtocol

logger = logging.getLogger(__name__)

EMAIL_CHANNEL = "email"
_EMAIL_PREFIX = f"{EMAIL_CHANNEL}:"


def normalize_address(address: str | None) -> str:
    """Normaliza endereço (trim + lowercase)."""
    return (address or "").strip().lower()


def iter_email_links(links: Sequence[str]) -> list[str]:
    """Extrai os endereços normalizados dos links do canal email."""
    return [
        normalize_address(link[len(_EMAIL_PREFIX):])
        for link in links
        if link.startswith(_EMAIL_PREFIX)
    ]


def match_identity(table: Mapping[str, Sequence[str]], address: str) -> str | None:
    """Função pura: primeira identidade cujo link email bate com o endereço."""
    normalized = normalize_address(address)
    if not normalized:
        return None
    for identity, links in table.items():
        if normalized in iter_email_links(links):
            return identity
    return None


def find_ambiguous_addresses(
    table: Mapping[str, Sequence[str]],
) -> dict[str, list[str]]:
    """Endereços vinculados a mais de uma identidade (ordem da tabela)."""
    owners: dict[str, list[str]] = {}
    for identity, links in table.items():
        for address in iter_email_links(links):
            claimed = owners.setdefault(address, [])
            if identity not in claimed:
                claimed.append(identity)
    return {address: ids for address, ids in owners.items() if len(ids) > 1}


class IdentityResolver:
    """Mapeia endereço de remetente para identidade via store de vínculos."""

    __slots__ = ("_store",)

    def __init__(self, store: IdentityLinkStoreProtocol) -> None:
        self._store = store

    def resolve(self, address: str) -> str | None:
        """Retorna a identidade vinculada ou None (remetente desconhecido)."""
        return match_identity(self._store.load_links(), address)

    def configured_identities(self) -> list[str]:
        """Identidades presentes na tabela atual (para logs de startup)."""
        return list(self._store.load_links().keys())

    def ambiguous_addresses(self) -> dict[str, list[str]]:
        """Endereços com mais de um dono na tabela atual."""
        return find_ambiguous_addresses(self._store.load_links())
