"""Agregador de settings do Mailbridge.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Inbound (AgentMail)
from config.settings.agentmail import (
    MESSAGE_RECEIVED_EVENT,
    AgentMailSettings,
    get_agentmail_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Outbound (Resend)
from config.settings.resend import (
    RESEND_API_BASE_URL,
    ResendSettings,
    get_resend_settings,
)

# Runtime de agente e stores externos
from config.settings.runtime import (
    RuntimeSettings,
    get_runtime_settings,
)

__all__ = [
    # Constants
    "MESSAGE_RECEIVED_EVENT",
    "RESEND_API_BASE_URL",
    # Channels
    "AgentMailSettings",
    # Base
    "BaseSettings",
    "Environment",
    "ResendSettings",
    # Runtime
    "RuntimeSettings",
    "get_agentmail_settings",
    "get_base_settings",
    "get_resend_settings",
    "get_runtime_settings",
]
