"""Primitivas de resiliência para chamadas externas."""

from app.infra.resilience.circuit_breaker import (
    BreakerCounts,
    BreakerState,
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerOpenError,
    CompletionHandle,
)

__all__ = [
    "BreakerCounts",
    "BreakerState",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitBreakerOpenError",
    "CompletionHandle",
]
