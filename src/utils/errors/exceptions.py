"""Exceções de domínio do pipeline de email e falhas de infraestrutura."""

from __future__ import annotations


class MailbridgeError(Exception):
    """Base para todas as falhas conhecidas do serviço."""


class ConfigLoadFailure(MailbridgeError):
    """Configuração inválida no startup (fatal)."""


class MalformedInboundError(MailbridgeError, ValueError):
    """Payload de webhook estruturalmente inválido (rejeitado na borda)."""


class SessionNotFoundError(MailbridgeError):
    """Sessão inexistente no registro para a chave calculada."""

    def __init__(self, session_key: str) -> None:
        super().__init__(
            f"Sessão {session_key} não existe, crie a sessão antes pelo cliente web"
        )
        self.session_key = session_key


class DispatchFailure(MailbridgeError):
    """Falha ao despachar texto para o runtime do agente (timeout ou erro)."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


class ReplySendFailure(MailbridgeError):
    """Falha ao enviar resposta pelo provedor de email."""


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class StoreUnavailableError(InfrastructureError):
    """Falha de leitura de um store externo (links de identidade, sessões)."""
