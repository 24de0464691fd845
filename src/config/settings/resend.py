"""Settings específicas do envio via Resend.

Configurações do provedor transacional usado para responder os emails.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

RESEND_API_BASE_URL: str = "https://api.resend.com"
DEFAULT_SIGNATURE: str = "🏔️ Mailbridge"


@dataclass(frozen=True)
class ResendSettings:
    """Configurações do canal de envio Resend.

    Attributes:
        api_key: Bearer token da API Resend
        from_email: Endereço remetente (domínio verificado)
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Tentativas extras em erro transitório (0 = sem retry)
        signature: Assinatura anexada às respostas
    """

    api_key: str = ""
    from_email: str = ""
    api_base_url: str = RESEND_API_BASE_URL
    request_timeout_seconds: float = 30.0
    max_retries: int = 0
    signature: str = DEFAULT_SIGNATURE

    @property
    def emails_endpoint(self) -> str:
        """URL do endpoint de envio."""
        return f"{self.api_base_url.rstrip('/')}/emails"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de envio.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("RESEND_API_KEY não configurado")

        if not self.from_email or "@" not in self.from_email:
            errors.append("RESEND_FROM_EMAIL não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("RESEND_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("RESEND_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> ResendSettings:
    """Carrega ResendSettings a partir de variáveis de ambiente."""
    return ResendSettings(
        api_key=os.getenv("RESEND_API_KEY", ""),
        from_email=os.getenv("RESEND_FROM_EMAIL", ""),
        api_base_url=os.getenv("RESEND_API_BASE_URL", RESEND_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("RESEND_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("RESEND_MAX_RETRIES", "0")),
        signature=os.getenv("MAIL_SIGNATURE", DEFAULT_SIGNATURE),
    )


@lru_cache(maxsize=1)
def get_resend_settings() -> ResendSettings:
    """Retorna instância cacheada de ResendSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
