"""Métricas via structured logging.

As métricas são linhas de log com `metric_type`, agregáveis depois pelo
backend de logs (Cloud Logging, Loki, etc.).

Uso:
    start = time.perf_counter()
    ...
    record_latency("dispatcher", "message", (time.perf_counter() - start) * 1000)
    record_outcome("forward", "replied")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "dispatcher", "resend")
        operation: Nome da operação (ex: "message", "reset")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (None = usa o do contexto)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_outcome(
    path: str,
    outcome: str,
    correlation_id: str | None = None,
) -> None:
    """Registra o desfecho de uma mensagem no pipeline.

    Args:
        path: Caminho percorrido ("rejected", "reset", "forward")
        outcome: Estado final (ex: "replied", "suppressed", "apologized")
        correlation_id: ID de correlação (None = usa o do contexto)
    """
    extra: dict[str, object] = {
        "metric_type": "outcome",
        "component": "pipeline",
        "path": path,
        "outcome": outcome,
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_outcome", extra=extra)
