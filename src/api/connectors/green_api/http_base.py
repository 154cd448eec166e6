"""Cliente HTTP base para o upstream Green-API.

Cada chamada lógica vira uma sequência limitada de tentativas:
- breaker.allow() antes de cada tentativa (rejeição encerra a chamada)
- timeout de transporte e status >= 500 são transitórios (retry com delay constante)
- demais erros de transporte e respostas 4xx seguem direto para o chamador
- o último 5xx após esgotar as tentativas é devolvido como resposta normal
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.infra.resilience import CircuitBreaker, CircuitBreakerOpenError
from app.observability import get_correlation_id, record_latency, record_retry
from app.protocols.models import UpstreamResponse
from utils.errors import UpstreamError

logger = logging.getLogger(__name__)

# Status a partir do qual a resposta conta como falha para o breaker
SERVER_ERROR_THRESHOLD = 500


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 10.0
    max_retries: int = 2
    retry_delay_seconds: float = 1.0
    default_headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )
    verify_ssl: bool = True


def is_retryable_error(exc: BaseException) -> bool:
    """Somente timeouts são transitórios; cancelamento nunca é."""
    if isinstance(exc, asyncio.CancelledError):
        return False
    return isinstance(exc, (httpx.TimeoutException, TimeoutError))


def validate_upstream_url(url: str) -> None:
    """Garante URL absoluta http(s) antes de qualquer tentativa.

    Raises:
        UpstreamError: Se a URL montada for inválida.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise UpstreamError("invalid upstream url", exc) from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise UpstreamError("invalid upstream url")


class HttpClient:
    """Executa requisições sob retry constante + circuit breaker."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        breaker: CircuitBreaker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._breaker = breaker or CircuitBreaker()
        self._client = httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            verify=self._config.verify_ssl,
            transport=transport,
        )

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        operation: str = "request",
    ) -> UpstreamResponse:
        """Executa uma chamada lógica (até max_retries + 1 tentativas).

        Raises:
            UpstreamError: Breaker aberto, URL inválida ou falha de transporte.
        """
        validate_upstream_url(url)
        max_attempts = self._config.max_retries + 1

        for attempt in range(1, max_attempts + 1):
            try:
                done = self._breaker.allow()
            except CircuitBreakerOpenError as exc:
                logger.warning(
                    "upstream_circuit_open",
                    extra={"operation": operation, "attempt": attempt},
                )
                raise UpstreamError("green-api circuit breaker is open") from exc

            started = time.perf_counter()
            try:
                response = await self._client.request(
                    method,
                    url,
                    json=json,
                    headers=self._config.default_headers,
                )
            except httpx.HTTPError as exc:
                done(False)
                if attempt < max_attempts and is_retryable_error(exc):
                    await self._backoff(operation, attempt, type(exc).__name__)
                    continue
                logger.warning(
                    "upstream_request_failed",
                    extra={
                        "operation": operation,
                        "attempt": attempt,
                        "error_type": type(exc).__name__,
                    },
                )
                raise UpstreamError("green-api request failed", exc) from exc
            except BaseException:
                # Cancelamento também conta como falha, mas propaga sem retry
                done(False)
                raise

            done(response.status_code < SERVER_ERROR_THRESHOLD)
            record_latency(
                "green_api",
                operation,
                (time.perf_counter() - started) * 1000,
                get_correlation_id() or None,
            )
            logger.debug(
                "upstream_response",
                extra={
                    "operation": operation,
                    "attempt": attempt,
                    "status_code": response.status_code,
                },
            )

            if response.status_code >= SERVER_ERROR_THRESHOLD and attempt < max_attempts:
                await self._backoff(operation, attempt, f"status_{response.status_code}")
                continue

            return UpstreamResponse(
                status_code=response.status_code,
                body=response.content,
                content_type=response.headers.get("content-type", ""),
                headers=response.headers,
            )

        raise UpstreamError("green-api request failed after retries")

    async def _backoff(self, operation: str, attempt: int, reason: str) -> None:
        delay = self._config.retry_delay_seconds
        record_retry("green_api", operation, attempt, reason)
        logger.info(
            "http_backoff",
            extra={"operation": operation, "attempt": attempt, "backoff_seconds": delay},
        )
        if delay > 0:
            # asyncio.sleep retorna assim que a task é cancelada
            await asyncio.sleep(delay)
