"""Testes do GreenApiHttpClient (retry constante + circuit breaker).

O upstream é simulado com httpx.MockTransport; nenhum socket é aberto.
"""

from __future__ import annotations

import asyncio
import json
import time

import httpx
import pytest

from api.connectors.green_api import (
    GreenApiHttpClient,
    HttpClientConfig,
    create_green_api_http_client,
    is_retryable_error,
)
from app.infra.resilience import (
    BreakerState,
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerOpenError,
)
from config.settings import CircuitBreakerSettings, GreenApiSettings, RetrySettings
from utils.errors import UpstreamError

BASE_URL = "https://api.green-api.test"


class RecordingHandler:
    """Handler de MockTransport que devolve respostas em sequência."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, Exception):
            raise item
        return item


def _client(
    handler: RecordingHandler,
    max_retries: int = 1,
    delay: float = 0.0,
    breaker: CircuitBreaker | None = None,
    base_url: str = BASE_URL,
) -> GreenApiHttpClient:
    return GreenApiHttpClient(
        base_url,
        config=HttpClientConfig(
            timeout_seconds=5.0,
            max_retries=max_retries,
            retry_delay_seconds=delay,
        ),
        breaker=breaker
        or CircuitBreaker(
            CircuitBreakerConfig(consecutive_failure_threshold=50, min_requests=200)
        ),
        transport=httpx.MockTransport(handler),
    )


class TestRetryPolicy:
    """Laço de tentativas."""

    @pytest.mark.asyncio
    async def test_retries_server_error_then_succeeds(self) -> None:
        """500 seguido de 200: duas tentativas, resposta 200."""
        handler = RecordingHandler(
            httpx.Response(500, json={"error": "boom"}),
            httpx.Response(200, json={"stateInstance": "authorized"}),
        )
        client = _client(handler, max_retries=1)

        response = await client.get_state_instance("1101", "token")

        assert response.status_code == 200
        assert json.loads(response.body) == {"stateInstance": "authorized"}
        assert len(handler.requests) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self) -> None:
        handler = RecordingHandler(httpx.Response(400, json={"message": "bad"}))
        client = _client(handler, max_retries=3)

        response = await client.get_settings("1101", "token")

        assert response.status_code == 400
        assert len(handler.requests) == 1
        await client.aclose()

    @pytest.mark.asyncio
    async def test_exhausted_server_error_is_returned(self) -> None:
        """500 persistente: resposta final 500 devolvida após duas tentativas."""
        handler = RecordingHandler(httpx.Response(500, text="still down"))
        client = _client(handler, max_retries=1)

        response = await client.get_settings("1101", "token")

        assert response.status_code == 500
        assert response.body == b"still down"
        assert len(handler.requests) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_is_retried(self) -> None:
        handler = RecordingHandler(
            httpx.ReadTimeout("read timed out"),
            httpx.Response(200, json={}),
        )
        client = _client(handler, max_retries=1)

        response = await client.get_settings("1101", "token")

        assert response.status_code == 200
        assert len(handler.requests) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_exhausted_timeout_raises_upstream_error(self) -> None:
        handler = RecordingHandler(httpx.ConnectTimeout("connect timed out"))
        client = _client(handler, max_retries=2)

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_settings("1101", "token")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)
        assert len(handler.requests) == 3
        await client.aclose()

    @pytest.mark.asyncio
    async def test_connect_error_is_not_retried(self) -> None:
        handler = RecordingHandler(httpx.ConnectError("connection refused"))
        client = _client(handler, max_retries=3)

        with pytest.raises(UpstreamError, match="green-api request failed"):
            await client.get_settings("1101", "token")

        assert len(handler.requests) == 1
        await client.aclose()

    @pytest.mark.asyncio
    async def test_zero_retries_means_single_attempt(self) -> None:
        handler = RecordingHandler(httpx.Response(503))
        client = _client(handler, max_retries=0)

        response = await client.get_settings("1101", "token")

        assert response.status_code == 503
        assert len(handler.requests) == 1
        await client.aclose()

    @pytest.mark.asyncio
    async def test_cancellation_during_backoff_aborts_promptly(self) -> None:
        """Cancelar durante a espera entre tentativas encerra a chamada na hora."""
        handler = RecordingHandler(httpx.Response(500))
        client = _client(handler, max_retries=3, delay=30.0)

        task = asyncio.create_task(client.get_settings("1101", "token"))
        while not handler.requests:
            await asyncio.sleep(0)
        await asyncio.sleep(0.01)

        started = time.perf_counter()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert time.perf_counter() - started < 1.0
        assert len(handler.requests) == 1
        await client.aclose()


class TestCircuitBreakerIntegration:
    """Interação do laço com o breaker."""

    @pytest.mark.asyncio
    async def test_open_breaker_fails_without_network(self) -> None:
        breaker = CircuitBreaker(
            CircuitBreakerConfig(consecutive_failure_threshold=1, min_requests=1)
        )
        breaker.allow()(False)
        handler = RecordingHandler(httpx.Response(200))
        client = _client(handler, breaker=breaker)

        with pytest.raises(UpstreamError, match="circuit breaker is open") as exc_info:
            await client.send_message("1101", "token", "79001234567@c.us", "hi")

        assert isinstance(exc_info.value.__cause__, CircuitBreakerOpenError)
        assert handler.requests == []
        await client.aclose()

    @pytest.mark.asyncio
    async def test_server_errors_count_as_failures(self) -> None:
        breaker = CircuitBreaker(
            CircuitBreakerConfig(consecutive_failure_threshold=2, min_requests=2)
        )
        handler = RecordingHandler(httpx.Response(502))
        client = _client(handler, max_retries=1, breaker=breaker)

        response = await client.get_settings("1101", "token")

        assert response.status_code == 502
        assert breaker.state is BreakerState.OPEN
        await client.aclose()

    @pytest.mark.asyncio
    async def test_breaker_opening_mid_call_stops_retries(self) -> None:
        breaker = CircuitBreaker(
            CircuitBreakerConfig(consecutive_failure_threshold=1, min_requests=1)
        )
        handler = RecordingHandler(httpx.Response(500))
        client = _client(handler, max_retries=3, breaker=breaker)

        with pytest.raises(UpstreamError, match="circuit breaker is open"):
            await client.get_settings("1101", "token")

        assert len(handler.requests) == 1
        await client.aclose()

    @pytest.mark.asyncio
    async def test_client_errors_count_as_successes(self) -> None:
        breaker = CircuitBreaker(
            CircuitBreakerConfig(consecutive_failure_threshold=1, min_requests=1)
        )
        handler = RecordingHandler(httpx.Response(404))
        client = _client(handler, breaker=breaker)

        await client.get_settings("1101", "token")

        assert breaker.state is BreakerState.CLOSED
        assert breaker.counts.total_successes == 1
        await client.aclose()


class TestRequestShapes:
    """Paths, métodos e payloads de cada operação."""

    @pytest.mark.asyncio
    async def test_get_settings_path(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={}))
        client = _client(handler, base_url=f"{BASE_URL}/")

        await client.get_settings("1101", "abc")

        request = handler.requests[0]
        assert request.method == "GET"
        assert str(request.url) == f"{BASE_URL}/waInstance1101/getSettings/abc"
        assert request.headers["content-type"] == "application/json"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_get_state_instance_path(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={}))
        client = _client(handler)

        await client.get_state_instance("1101", "abc")

        assert handler.requests[0].url.path == "/waInstance1101/getStateInstance/abc"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_send_message_payload(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"idMessage": "X1"}))
        client = _client(handler)

        response = await client.send_message("1101", "abc", "79001234567@c.us", "Olá")

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/waInstance1101/sendMessage/abc"
        assert json.loads(request.content) == {
            "chatId": "79001234567@c.us",
            "message": "Olá",
        }
        assert response.content_type == "application/json"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_send_file_by_url_payload(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"idMessage": "X2"}))
        client = _client(handler)

        await client.send_file_by_url(
            "1101",
            "abc",
            "79001234567@c.us",
            "https://files.example.com/report.pdf",
            "report.pdf",
        )

        request = handler.requests[0]
        assert request.url.path == "/waInstance1101/sendFileByUrl/abc"
        assert json.loads(request.content) == {
            "chatId": "79001234567@c.us",
            "urlFile": "https://files.example.com/report.pdf",
            "fileName": "report.pdf",
        }
        await client.aclose()

    @pytest.mark.asyncio
    async def test_invalid_base_url_fails_before_network(self) -> None:
        handler = RecordingHandler(httpx.Response(200))
        client = _client(handler, base_url="not-a-url")

        with pytest.raises(UpstreamError, match="invalid upstream url"):
            await client.get_settings("1101", "abc")

        assert handler.requests == []
        assert client.breaker.counts.requests == 0
        await client.aclose()


class TestIsRetryableError:
    """Classificação de erros transitórios."""

    def test_timeouts_are_retryable(self) -> None:
        assert is_retryable_error(httpx.ReadTimeout("t"))
        assert is_retryable_error(TimeoutError())

    def test_other_errors_are_not_retryable(self) -> None:
        assert not is_retryable_error(httpx.ConnectError("refused"))
        assert not is_retryable_error(asyncio.CancelledError())


class TestFactory:
    """create_green_api_http_client a partir das settings."""

    @pytest.mark.asyncio
    async def test_factory_applies_settings(self) -> None:
        settings = GreenApiSettings(
            base_url=BASE_URL,
            request_timeout_seconds=3.0,
            retry=RetrySettings(max_retries=0, delay_seconds=1.0),
            circuit_breaker=CircuitBreakerSettings(
                name="factory-cb", consecutive_failures=1, min_requests=1
            ),
        )
        handler = RecordingHandler(httpx.Response(500))
        client = create_green_api_http_client(
            settings, transport=httpx.MockTransport(handler)
        )

        response = await client.get_settings("1101", "abc")

        assert response.status_code == 500
        assert len(handler.requests) == 1
        assert client.breaker.name == "factory-cb"
        assert client.breaker.state is BreakerState.OPEN
        await client.aclose()
