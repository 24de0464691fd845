"""Settings específicas do canal inbound AgentMail.

Configurações do webhook que recebe emails do provedor AgentMail.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

MESSAGE_RECEIVED_EVENT: str = "message.received"


@dataclass(frozen=True)
class AgentMailSettings:
    """Configurações do canal AgentMail.

    Attributes:
        received_event_type: Tipo de evento processado (demais são só confirmados)
        webhook_processing_mode: Modo de processamento do webhook (inline|async)
        max_concurrent_tasks: Limite de tasks simultâneas no modo async
        shutdown_drain_seconds: Tempo de espera por tasks pendentes no shutdown
    """

    received_event_type: str = MESSAGE_RECEIVED_EVENT
    webhook_processing_mode: str = "inline"
    max_concurrent_tasks: int = 100
    shutdown_drain_seconds: float = 30.0

    def validate(self) -> list[str]:
        """Valida configurações do webhook.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.received_event_type:
            errors.append("AGENTMAIL_RECEIVED_EVENT_TYPE não pode ser vazio")

        if self.webhook_processing_mode not in ("async", "inline"):
            errors.append(
                "AGENTMAIL_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'"
            )

        if self.max_concurrent_tasks < 1:
            errors.append("AGENTMAIL_MAX_CONCURRENT_TASKS deve ser >= 1")

        return errors


def _load_from_env() -> AgentMailSettings:
    """Carrega AgentMailSettings a partir de variáveis de ambiente."""
    return AgentMailSettings(
        received_event_type=os.getenv(
            "AGENTMAIL_RECEIVED_EVENT_TYPE", MESSAGE_RECEIVED_EVENT
        ),
        webhook_processing_mode=os.getenv(
            "AGENTMAIL_WEBHOOK_PROCESSING_MODE", "inline"
        ).lower(),
        max_concurrent_tasks=int(os.getenv("AGENTMAIL_MAX_CONCURRENT_TASKS", "100")),
        shutdown_drain_seconds=float(
            os.getenv("AGENTMAIL_SHUTDOWN_DRAIN_SECONDS", "30")
        ),
    )


@lru_cache(maxsize=1)
def get_agentmail_settings() -> AgentMailSettings:
    """Retorna instância cacheada de AgentMailSettings."""
    return _load_from_env()
