"""App: orquestração do pipeline de email, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: fluxos end-to-end (webhook → pipeline)
- use_cases/: pipeline de email (sem IO direto)
- services/: resolver, locator, interpretador, dispatcher, composer
- infra/: stores JSON e runtime CLI
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
