"""Localização da sessão ativa de uma identidade.

A chave é determinística (namespace fixo + identidade). O registro é relido
a cada chamada para refletir o ciclo de vida externo das sessões; esta
camada nunca cria sessão.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.models import SessionReference
from config.settings.runtime import DEFAULT_SESSION_NAMESPACE

if TYPE_CHECKING:
    from app.protocols.session_registry import SessionRegistryProtocol

logger = logging.getLogger(__name__)

SESSION_HANDLE_FIELD = "sessionId"


def build_session_key(identity: str, namespace: str = DEFAULT_SESSION_NAMESPACE) -> str:
    """Chave da sessão principal da identidade (ex: agent:main:alice)."""
    return f"{namespace}:{identity}"


class SessionLocator:
    """Resolve identidade -> SessionReference a partir do registro."""

    __slots__ = ("_namespace", "_registry")

    def __init__(
        self,
        registry: SessionRegistryProtocol,
        namespace: str = DEFAULT_SESSION_NAMESPACE,
    ) -> None:
        self._registry = registry
        self._namespace = namespace

    def session_key(self, identity: str) -> str:
        return build_session_key(identity, self._namespace)

    def locate(self, identity: str) -> SessionReference | None:
        """Retorna a referência da sessão ou None se não registrada."""
        session_key = self.session_key(identity)
        record = self._registry.load_registry().get(session_key)
        if not record:
            return None

        handle = record.get(SESSION_HANDLE_FIELD)
        if not isinstance(handle, str) or not handle.strip():
            logger.warning(
                "session_record_without_handle",
                extra={"session_key": session_key},
            )
            return None

        return SessionReference(session_key=session_key, session_handle=handle)
