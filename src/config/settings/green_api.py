"""Settings do upstream Green-API.

Base URL, timeouts, retry e circuit breaker. As credenciais da
instância (idInstance/apiTokenInstance) chegam em cada request e
não fazem parte da configuração.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from config.settings.base.sources import (
    env_float,
    env_int,
    env_str,
    get_config_section,
)

GREEN_API_BASE_URL: str = "https://api.green-api.com"


@dataclass(frozen=True)
class RetrySettings:
    """Retry com delay constante.

    Attributes:
        max_retries: Tentativas extras após a primeira (0 = sem retry)
        delay_seconds: Espera fixa entre tentativas
    """

    max_retries: int = 2
    delay_seconds: float = 1.0

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not 0 <= self.max_retries <= 10:
            errors.append("GREEN_API_RETRY_MAX_RETRIES deve estar entre 0 e 10")
        if not 0 < self.delay_seconds <= 60:
            errors.append("GREEN_API_RETRY_DELAY_SECONDS deve estar em (0, 60]")
        return errors


@dataclass(frozen=True)
class CircuitBreakerSettings:
    """Parâmetros do circuit breaker do upstream.

    Attributes:
        name: Nome usado em logs e métricas
        consecutive_failures: Falhas seguidas para abrir
        half_open_max_requests: Sondas admitidas em half-open
        open_timeout_seconds: Tempo em open antes de sondar
        interval_seconds: Janela de contagem em closed (0 = nunca zera)
        failure_ratio: Razão de falhas para abrir
        min_requests: Volume mínimo antes de avaliar abertura
    """

    name: str = "green-api"
    consecutive_failures: int = 5
    half_open_max_requests: int = 1
    open_timeout_seconds: float = 30.0
    interval_seconds: float = 60.0
    failure_ratio: float = 0.6
    min_requests: int = 10

    def validate(self) -> list[str]:
        errors: list[str] = []
        prefix = "GREEN_API_CIRCUIT_BREAKER"

        if not self.name:
            errors.append(f"{prefix}_NAME não pode ser vazio")
        if not 1 <= self.consecutive_failures <= 50:
            errors.append(f"{prefix}_CONSECUTIVE_FAILURES deve estar entre 1 e 50")
        if not 1 <= self.half_open_max_requests <= 20:
            errors.append(f"{prefix}_HALF_OPEN_MAX_REQUESTS deve estar entre 1 e 20")
        if not 1 <= self.open_timeout_seconds <= 300:
            errors.append(f"{prefix}_OPEN_TIMEOUT_SECONDS deve estar entre 1 e 300")
        if not 0 <= self.interval_seconds <= 300:
            errors.append(f"{prefix}_INTERVAL_SECONDS deve estar entre 0 e 300")
        if not 0 <= self.failure_ratio <= 1:
            errors.append(f"{prefix}_FAILURE_RATIO deve estar entre 0 e 1")
        if not 1 <= self.min_requests <= 200:
            errors.append(f"{prefix}_MIN_REQUESTS deve estar entre 1 e 200")

        return errors


@dataclass(frozen=True)
class GreenApiSettings:
    """Configurações do cliente Green-API.

    Attributes:
        base_url: URL base do upstream (sem barra final)
        request_timeout_seconds: Timeout de cada tentativa HTTP
        call_deadline_seconds: Prazo total de uma chamada lógica (tentativas + esperas)
        retry: Política de retry
        circuit_breaker: Parâmetros do breaker
    """

    base_url: str = GREEN_API_BASE_URL
    request_timeout_seconds: float = 15.0
    call_deadline_seconds: float = 60.0
    retry: RetrySettings = field(default_factory=RetrySettings)
    circuit_breaker: CircuitBreakerSettings = field(default_factory=CircuitBreakerSettings)

    def validate(self) -> list[str]:
        """Valida configurações do upstream.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.base_url.startswith(("http://", "https://")):
            errors.append("GREEN_API_BASE_URL deve ser uma URL http(s)")

        if self.request_timeout_seconds <= 0:
            errors.append("GREEN_API_TIMEOUT_SECONDS deve ser > 0")

        if self.call_deadline_seconds <= 0:
            errors.append("GREEN_API_CALL_DEADLINE_SECONDS deve ser > 0")

        errors.extend(self.retry.validate())
        errors.extend(self.circuit_breaker.validate())
        return errors


def _load_retry(section: Mapping[str, Any]) -> RetrySettings:
    return RetrySettings(
        max_retries=env_int("GREEN_API_RETRY_MAX_RETRIES", section.get("max_retries", 2)),
        delay_seconds=env_float(
            "GREEN_API_RETRY_DELAY_SECONDS", section.get("delay_seconds", 1.0)
        ),
    )


def _load_circuit_breaker(section: Mapping[str, Any]) -> CircuitBreakerSettings:
    prefix = "GREEN_API_CIRCUIT_BREAKER"
    return CircuitBreakerSettings(
        name=env_str(f"{prefix}_NAME", section.get("name", "green-api")),
        consecutive_failures=env_int(
            f"{prefix}_CONSECUTIVE_FAILURES", section.get("consecutive_failures", 5)
        ),
        half_open_max_requests=env_int(
            f"{prefix}_HALF_OPEN_MAX_REQUESTS", section.get("half_open_max_requests", 1)
        ),
        open_timeout_seconds=env_float(
            f"{prefix}_OPEN_TIMEOUT_SECONDS", section.get("open_timeout_seconds", 30)
        ),
        interval_seconds=env_float(
            f"{prefix}_INTERVAL_SECONDS", section.get("interval_seconds", 60)
        ),
        failure_ratio=env_float(
            f"{prefix}_FAILURE_RATIO", section.get("failure_ratio", 0.6)
        ),
        min_requests=env_int(f"{prefix}_MIN_REQUESTS", section.get("min_requests", 10)),
    )


def _load_from_env() -> GreenApiSettings:
    """Carrega GreenApiSettings da seção green_api do YAML e de env vars."""
    section = get_config_section("green_api")
    return GreenApiSettings(
        base_url=env_str("GREEN_API_BASE_URL", section.get("base_url", GREEN_API_BASE_URL)),
        request_timeout_seconds=env_float(
            "GREEN_API_TIMEOUT_SECONDS", section.get("timeout_seconds", 15)
        ),
        call_deadline_seconds=env_float(
            "GREEN_API_CALL_DEADLINE_SECONDS", section.get("call_deadline_seconds", 60)
        ),
        retry=_load_retry(get_config_section("green_api", "retry")),
        circuit_breaker=_load_circuit_breaker(
            get_config_section("green_api", "circuit_breaker")
        ),
    )


@lru_cache(maxsize=1)
def get_green_api_settings() -> GreenApiSettings:
    """Retorna instância cacheada de GreenApiSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
