"""Protocolo do store de vínculos de identidade (somente leitura)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence


class IdentityLinkStoreProtocol(ABC):
    """Fonte da tabela identidade -> links `canal:valor`.

    Cada chamada deve refletir o estado atual do store externo.
    """

    @abstractmethod
    def load_links(self) -> Mapping[str, Sequence[str]]: ...
