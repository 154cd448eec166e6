"""Mapeamento de falhas internas para a taxonomia externa de erros.

Ordem importa: breaker aberto é checado antes de timeout, porque a
rejeição do breaker pode carregar um timeout na cadeia de causas.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from app.domain.api_error import UPSTREAM_ERROR, VALIDATION_ERROR, ApiError
from app.infra.resilience import CircuitBreakerOpenError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from app.protocols.validator import ValidationError

INVALID_PAYLOAD_MESSAGE = "invalid request payload"

_TIMEOUT_TYPES: tuple[type[BaseException], ...] = (TimeoutError, httpx.TimeoutException)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def map_validation_error(exc: ValidationError) -> ApiError:
    """Falha de validação → 400 validation_error com campo e mensagem."""
    return ApiError(
        status_code=400,
        code=VALIDATION_ERROR,
        message=INVALID_PAYLOAD_MESSAGE,
        details=exc.as_details(),
    )


def map_upstream_error(exc: BaseException) -> ApiError:
    """Falha de upstream → upstream_error com status 503, 504 ou 502."""
    chain = list(_exception_chain(exc))
    if any(isinstance(item, CircuitBreakerOpenError) for item in chain):
        status_code = 503
    elif any(isinstance(item, _TIMEOUT_TYPES) for item in chain):
        status_code = 504
    else:
        status_code = 502
    return ApiError(status_code=status_code, code=UPSTREAM_ERROR, message=str(exc))
