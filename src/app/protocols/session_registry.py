"""Protocolo do registro de sessões do runtime (somente leitura)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class SessionRegistryProtocol(ABC):
    """Snapshot chave de sessão -> registro com `sessionId`.

    Cada chamada deve reler o registro (ciclo de vida externo).
    """

    @abstractmethod
    def load_registry(self) -> Mapping[str, Mapping[str, Any]]: ...
