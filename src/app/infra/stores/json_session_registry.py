"""Registro de sessões lido do sessions.json do runtime.

Formato: {"agent:main:alice": {"sessionId": "<uuid>", ...}, ...}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from app.infra.stores.json_file import read_json_file
from app.protocols.session_registry import SessionRegistryProtocol
from config.logging import log_fallback
from utils.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class JsonSessionRegistry(SessionRegistryProtocol):
    """Snapshot do registro de sessões, relido a cada lookup."""

    def __init__(self, registry_path: str | Path) -> None:
        self._registry_path = Path(registry_path)

    @property
    def registry_path(self) -> Path:
        return self._registry_path

    def load_registry(self) -> Mapping[str, Mapping[str, Any]]:
        try:
            registry = read_json_file(self._registry_path)
        except StoreUnavailableError as exc:
            logger.warning("session_registry_unreadable", extra={"error": str(exc)})
            log_fallback(logger, "session_registry", reason="unreadable")
            return {}

        if not isinstance(registry, dict):
            return {}
        return {
            str(key): record
            for key, record in registry.items()
            if isinstance(record, dict)
        }
