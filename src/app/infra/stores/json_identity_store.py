"""Store de vínculos de identidade lido do config JSON do runtime.

Formato esperado (trecho de openclaw.json):

    {"session": {"identityLinks": {"alice": ["email:alice@example.com"]}}}

O arquivo é relido a cada chamada: o runtime o altera fora de banda.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from app.infra.stores.json_file import read_json_file
from app.protocols.identity_store import IdentityLinkStoreProtocol
from config.logging import log_fallback
from utils.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class JsonIdentityLinkStore(IdentityLinkStoreProtocol):
    """Tabela identidade -> links a partir de `session.identityLinks`.

    Falha de leitura degrada para tabela vazia (todo remetente vira
    desconhecido) com warning, sem derrubar o pipeline.
    """

    def __init__(self, config_path: str | Path) -> None:
        self._config_path = Path(config_path)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load_links(self) -> Mapping[str, Sequence[str]]:
        try:
            config = read_json_file(self._config_path)
        except StoreUnavailableError as exc:
            logger.warning("identity_links_unreadable", extra={"error": str(exc)})
            log_fallback(logger, "identity_store", reason="unreadable")
            return {}

        session = config.get("session") if isinstance(config, dict) else None
        links = session.get("identityLinks") if isinstance(session, dict) else None
        if not isinstance(links, dict):
            return {}

        return {
            str(identity): [str(link) for link in entries]
            for identity, entries in links.items()
            if isinstance(entries, list)
        }
