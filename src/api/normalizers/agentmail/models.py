"""Contrato do objeto `message` do webhook AgentMail (validação via pydantic)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SenderField = str | dict[str, Any] | list[str | dict[str, Any]] | None


class AgentMailMessage(BaseModel):
    """Objeto `message` de um evento message.received.

    O remetente chega como `from_` ou `from`, dependendo da versão do
    provedor.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_id: str | None = None
    in_reply_to: str | None = None
    from_: SenderField = Field(default=None, alias="from")
    to: Any = None
    subject: str | None = None
    text: str | None = None
    preview: str | None = None
    timestamp: str | None = None
