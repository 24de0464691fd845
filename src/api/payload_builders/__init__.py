"""Payload builders por provedor: construção de payloads para APIs externas.

Estrutura:
- resend/: corpo JSON de envio de email

Cada provedor tem seus próprios builders, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
