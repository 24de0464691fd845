"""Connectors por provedor: adapters de borda para APIs externas.

Estrutura:
- agentmail/: webhook inbound de emails
- resend/: envio transacional das respostas
- http_base.py: cliente HTTP comum (httpx)

Cada provedor tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
