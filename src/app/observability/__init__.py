"""Observabilidade — logs estruturados, correlation_id, métricas.

Re-exporta funções de correlation_id e métricas para uso em toda a aplicação.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_retry
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_breaker_transition,
    record_latency,
    record_retry,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_breaker_transition",
    "record_latency",
    "record_retry",
    "reset_correlation_id",
    "set_correlation_id",
]
