"""Settings do runtime de agente e dos stores externos.

Agrupa tudo que o pipeline precisa para falar com o runtime de sessões:
binário CLI, arquivos de identidade/sessões e constantes de protocolo
(token de controle, instrução de reset, sentinela de supressão).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_RUNTIME_HOME = Path("~/.openclaw")

DEFAULT_RUNTIME_BINARY: str = "openclaw"
DEFAULT_IDENTITY_CONFIG_PATH: str = str(_RUNTIME_HOME / "openclaw.json")
DEFAULT_SESSION_REGISTRY_PATH: str = str(
    _RUNTIME_HOME / "agents" / "main" / "sessions" / "sessions.json"
)
DEFAULT_SESSION_NAMESPACE: str = "agent:main"
DEFAULT_CONTROL_TOKEN: str = "NEW"
DEFAULT_RESET_INSTRUCTION: str = "/new"
DEFAULT_SUPPRESSION_SENTINEL: str = "NO_REPLY"


@dataclass(frozen=True)
class RuntimeSettings:
    """Configurações do runtime de agente.

    Attributes:
        runtime_binary: Executável do runtime (CLI)
        identity_config_path: JSON com `session.identityLinks`
        session_registry_path: JSON com o registro chave -> sessionId
        session_namespace: Prefixo fixo da chave de sessão
        control_token: Assunto que dispara reset de sessão
        reset_instruction: Mensagem enviada ao runtime no reset
        suppression_sentinel: Saída do agente que significa "não responder"
        message_timeout_seconds: Timeout de despacho de mensagem
        reset_timeout_seconds: Timeout de despacho de reset
        serialize_per_session: Serializa despachos por chave de sessão
    """

    runtime_binary: str = DEFAULT_RUNTIME_BINARY
    identity_config_path: str = DEFAULT_IDENTITY_CONFIG_PATH
    session_registry_path: str = DEFAULT_SESSION_REGISTRY_PATH
    session_namespace: str = DEFAULT_SESSION_NAMESPACE
    control_token: str = DEFAULT_CONTROL_TOKEN
    reset_instruction: str = DEFAULT_RESET_INSTRUCTION
    suppression_sentinel: str = DEFAULT_SUPPRESSION_SENTINEL
    message_timeout_seconds: float = 120.0
    reset_timeout_seconds: float = 30.0
    serialize_per_session: bool = True

    def validate(self) -> list[str]:
        """Valida configurações do runtime.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.runtime_binary:
            errors.append("AGENT_RUNTIME_BINARY não configurado")

        if not self.session_namespace:
            errors.append("AGENT_SESSION_NAMESPACE não pode ser vazio")

        if not self.control_token.strip():
            errors.append("MAIL_CONTROL_TOKEN não pode ser vazio")

        if not self.suppression_sentinel.strip():
            errors.append("AGENT_SUPPRESSION_SENTINEL não pode ser vazio")

        if self.message_timeout_seconds <= 0:
            errors.append("AGENT_MESSAGE_TIMEOUT_SECONDS deve ser > 0")

        if self.reset_timeout_seconds <= 0:
            errors.append("AGENT_RESET_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> RuntimeSettings:
    """Carrega RuntimeSettings a partir de variáveis de ambiente."""
    return RuntimeSettings(
        runtime_binary=os.getenv("AGENT_RUNTIME_BINARY", DEFAULT_RUNTIME_BINARY),
        identity_config_path=os.path.expanduser(
            os.getenv("AGENT_IDENTITY_CONFIG_PATH", DEFAULT_IDENTITY_CONFIG_PATH)
        ),
        session_registry_path=os.path.expanduser(
            os.getenv("AGENT_SESSION_REGISTRY_PATH", DEFAULT_SESSION_REGISTRY_PATH)
        ),
        session_namespace=os.getenv("AGENT_SESSION_NAMESPACE", DEFAULT_SESSION_NAMESPACE),
        control_token=os.getenv("MAIL_CONTROL_TOKEN", DEFAULT_CONTROL_TOKEN),
        reset_instruction=os.getenv("AGENT_RESET_INSTRUCTION", DEFAULT_RESET_INSTRUCTION),
        suppression_sentinel=os.getenv(
            "AGENT_SUPPRESSION_SENTINEL", DEFAULT_SUPPRESSION_SENTINEL
        ),
        message_timeout_seconds=float(os.getenv("AGENT_MESSAGE_TIMEOUT_SECONDS", "120")),
        reset_timeout_seconds=float(os.getenv("AGENT_RESET_TIMEOUT_SECONDS", "30")),
        serialize_per_session=os.getenv("AGENT_SERIALIZE_PER_SESSION", "true").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_runtime_settings() -> RuntimeSettings:
    """Retorna instância cacheada de RuntimeSettings."""
    return _load_from_env()
