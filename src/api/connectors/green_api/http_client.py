"""Cliente HTTP especializado para a Green-API.

Expõe uma operação por endpoint do upstream; todas compartilham o mesmo
laço de tentativas de HttpClient (retry constante + circuit breaker):

| Operação            | Método | Path                                        |
|---------------------|--------|---------------------------------------------|
| get_settings        | GET    | /waInstance{id}/getSettings/{token}         |
| get_state_instance  | GET    | /waInstance{id}/getStateInstance/{token}    |
| send_message        | POST   | /waInstance{id}/sendMessage/{token}         |
| send_file_by_url    | POST   | /waInstance{id}/sendFileByUrl/{token}       |

Credenciais entram direto no path; nunca são logadas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.green_api.http_base import HttpClient, HttpClientConfig
from app.infra.resilience import BreakerState, CircuitBreaker, CircuitBreakerConfig
from app.observability import record_breaker_transition
from app.protocols.models import UpstreamResponse

if TYPE_CHECKING:
    import httpx

    from config.settings import GreenApiSettings

logger: logging.Logger = logging.getLogger(__name__)


class GreenApiHttpClient(HttpClient):
    """Cliente da Green-API para um único base_url."""

    def __init__(
        self,
        base_url: str,
        config: HttpClientConfig | None = None,
        breaker: CircuitBreaker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config=config, breaker=breaker, transport=transport)
        self._base_url = base_url.rstrip("/")

    async def get_settings(
        self, id_instance: str, api_token_instance: str
    ) -> UpstreamResponse:
        """Lê as configurações da instância."""
        return await self._call("GET", "getSettings", id_instance, api_token_instance)

    async def get_state_instance(
        self, id_instance: str, api_token_instance: str
    ) -> UpstreamResponse:
        """Lê o estado de conexão da instância."""
        return await self._call(
            "GET", "getStateInstance", id_instance, api_token_instance
        )

    async def send_message(
        self,
        id_instance: str,
        api_token_instance: str,
        chat_id: str,
        message: str,
    ) -> UpstreamResponse:
        """Envia mensagem de texto para um chat canônico (`...@c.us`)."""
        payload = {"chatId": chat_id, "message": message}
        return await self._call(
            "POST", "sendMessage", id_instance, api_token_instance, payload
        )

    async def send_file_by_url(
        self,
        id_instance: str,
        api_token_instance: str,
        chat_id: str,
        url_file: str,
        file_name: str,
    ) -> UpstreamResponse:
        """Envia arquivo hospedado em URL pública."""
        payload = {"chatId": chat_id, "urlFile": url_file, "fileName": file_name}
        return await self._call(
            "POST", "sendFileByUrl", id_instance, api_token_instance, payload
        )

    def build_url(self, method_name: str, id_instance: str, api_token_instance: str) -> str:
        return f"{self._base_url}/waInstance{id_instance}/{method_name}/{api_token_instance}"

    async def _call(
        self,
        http_method: str,
        method_name: str,
        id_instance: str,
        api_token_instance: str,
        payload: dict[str, Any] | None = None,
    ) -> UpstreamResponse:
        url = self.build_url(method_name, id_instance, api_token_instance)
        response = await self.request(
            http_method,
            url,
            json=payload,
            operation=method_name,
        )
        logger.info(
            "green_api_call_completed",
            extra={
                "operation": method_name,
                "path": f"/waInstance{id_instance}/{method_name}/***",
                "status_code": response.status_code,
            },
        )
        return response


def _on_breaker_state_change(name: str, previous: BreakerState, current: BreakerState) -> None:
    record_breaker_transition(name, previous.value, current.value)


def create_green_api_http_client(
    settings: GreenApiSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GreenApiHttpClient:
    """Factory para criar cliente Green-API a partir das settings.

    Args:
        settings: GreenApiSettings opcional. Se None, carrega do ambiente.
        transport: Transporte httpx alternativo (testes).

    Returns:
        Cliente configurado com seu próprio circuit breaker.
    """
    # Import local para evitar dependência circular
    from config.settings import get_green_api_settings

    green_api = settings or get_green_api_settings()
    cb = green_api.circuit_breaker
    breaker = CircuitBreaker(
        CircuitBreakerConfig(
            name=cb.name,
            consecutive_failure_threshold=cb.consecutive_failures,
            half_open_max_requests=cb.half_open_max_requests,
            open_timeout_seconds=cb.open_timeout_seconds,
            closed_interval_seconds=cb.interval_seconds,
            failure_ratio_threshold=cb.failure_ratio,
            min_requests=cb.min_requests,
        ),
        on_state_change=_on_breaker_state_change,
    )
    config = HttpClientConfig(
        timeout_seconds=green_api.request_timeout_seconds,
        max_retries=green_api.retry.max_retries,
        retry_delay_seconds=green_api.retry.delay_seconds,
    )
    return GreenApiHttpClient(
        green_api.base_url,
        config=config,
        breaker=breaker,
        transport=transport,
    )
