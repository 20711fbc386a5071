"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Retry: esperas de backoff na entrega ao webhook de destino
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    outcome: str = "ok",
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "task_submitter")
        operation: Nome da operação (ex: "submit")
        latency_ms: Latência em milissegundos
        outcome: Resultado resumido (ok, error_code)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "outcome": outcome,
        },
    )


def record_retry(component: str, attempt: int, wait_seconds: float) -> None:
    """Registra uma espera de backoff antes de nova tentativa."""
    logger.info(
        "metric_retry",
        extra={
            "metric_type": "retry",
            "component": component,
            "attempt": attempt,
            "wait_seconds": wait_seconds,
        },
    )
