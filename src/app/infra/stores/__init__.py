"""Stores: leitura dos dados externos do runtime de agente.

Módulos disponíveis:
    - json_identity_store: vínculos de identidade (openclaw.json)
    - json_session_registry: registro de sessões (sessions.json)
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.json_identity_store import JsonIdentityLinkStore
from app.infra.stores.json_session_registry import JsonSessionRegistry
from app.infra.stores.memory_stores import MemoryIdentityLinkStore, MemorySessionRegistry

__all__ = [
    "JsonIdentityLinkStore",
    "JsonSessionRegistry",
    "MemoryIdentityLinkStore",
    "MemorySessionRegistry",
]
