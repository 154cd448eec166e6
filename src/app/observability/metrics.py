"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, CloudWatch Insights, Loki, etc.).

Métricas suportadas:
- Latência: tempo de cada tentativa ao upstream por operação
- Retry: contador de novas tentativas com o motivo
- Breaker: transições de estado do circuit breaker

Uso:
    from app.observability.metrics import record_latency, record_retry

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("green_api", "send_message", latency_ms, correlation_id)
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
        component: Nome do componente (ex: "green_api", "http")
        operation: Nome da operação (ex: "send_message", "get_settings")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_retry(
    component: str,
    operation: str,
    attempt: int,
    reason: str,
) -> None:
    """Registra nova tentativa após falha transitória.

    Args:
        component: Nome do componente
        operation: Nome da operação
        attempt: Tentativa que falhou (1-based)
        reason: Motivo (ex: "ReadTimeout", "status_503")
    """
    logger.info(
        "metric_retry",
        extra={
            "metric_type": "retry",
            "component": component,
            "operation": operation,
            "attempt": attempt,
            "reason": reason,
        },
    )


def record_breaker_transition(
    breaker: str,
    from_state: str,
    to_state: str,
) -> None:
    """Registra transição de estado do circuit breaker."""
    logger.info(
        "metric_breaker_transition",
        extra={
            "metric_type": "breaker_transition",
            "component": breaker,
            "from_state": from_state,
            "to_state": to_state,
        },
    )
