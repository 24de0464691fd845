"""API: camada de borda e adapters de canais.

Responsabilidades:
- Receber o webhook do AgentMail
- Normalizar payloads externos para modelos internos
- Construir e enviar payloads para a API da Resend

Subpastas:
- connectors/: clientes HTTP e parse de webhook por provedor
- normalizers/: conversão de payloads externos → modelos internos
- payload_builders/: construção de payloads para APIs externas
- routes/: endpoints HTTP (webhook, health, readiness)

NÃO PODE conter: FSM, resolução de identidade, orquestração de use cases.
"""
