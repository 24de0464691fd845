"""Stores em memória, apenas para desenvolvimento e testes.

Os dados são mutáveis por fora (como os arquivos reais) e cada leitura
devolve um snapshot independente.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from app.protocols.identity_store import IdentityLinkStoreProtocol
from app.protocols.session_registry import SessionRegistryProtocol


class MemoryIdentityLinkStore(IdentityLinkStoreProtocol):
    """Tabela de vínculos em memória."""

    def __init__(self, links: Mapping[str, Sequence[str]] | None = None) -> None:
        self.links: dict[str, list[str]] = {
            identity: list(entries) for identity, entries in (links or {}).items()
        }
        self.load_count = 0

    def load_links(self) -> Mapping[str, Sequence[str]]:
        self.load_count += 1
        return copy.deepcopy(self.links)


class MemorySessionRegistry(SessionRegistryProtocol):
    """Registro de sessões em memória."""

    def __init__(self, sessions: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self.sessions: dict[str, dict[str, Any]] = {
            key: dict(record) for key, record in (sessions or {}).items()
        }
        self.load_count = 0

    def load_registry(self) -> Mapping[str, Mapping[str, Any]]:
        self.load_count += 1
        return copy.deepcopy(self.sessions)
