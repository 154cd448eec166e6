"""Testes do GreenApiGatewayUseCase com cliente fake."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from api.normalizers.green_api import GreenApiRequestNormalizer
from app.domain.api_error import UPSTREAM_ERROR, VALIDATION_ERROR, ApiError
from app.infra.resilience import BreakerState, CircuitBreakerOpenError
from app.protocols.models import (
    CredentialsRequest,
    SendFileByUrlRequest,
    SendMessageRequest,
)
from app.use_cases.green_api import GreenApiGatewayUseCase
from tests.fakes.fake_green_api_client import FakeGreenApiClient, json_response
from utils.errors import UpstreamError

CREDENTIALS = {"idInstance": "1101", "apiTokenInstance": "secret-token"}


def _use_case(
    client: FakeGreenApiClient, deadline: float | None = None
) -> GreenApiGatewayUseCase:
    return GreenApiGatewayUseCase(
        normalizer=GreenApiRequestNormalizer(),
        client=client,
        call_deadline_seconds=deadline,
    )


def _breaker_open_error() -> UpstreamError:
    error = UpstreamError("green-api circuit breaker is open")
    error.__cause__ = CircuitBreakerOpenError("green-api", BreakerState.OPEN)
    return error


class TestSuccessfulCalls:
    """Caminho feliz: resposta do upstream sem modificação."""

    @pytest.mark.asyncio
    async def test_get_settings_passes_trimmed_credentials(self) -> None:
        client = FakeGreenApiClient(response=json_response(200, {"webhookUrl": ""}))

        response = await _use_case(client).get_settings(
            CredentialsRequest(idInstance=" 1101 ", apiTokenInstance="secret-token")
        )

        assert response is client.response
        assert client.calls == [("get_settings", ("1101", "secret-token"))]

    @pytest.mark.asyncio
    async def test_get_state_calls_state_instance(self) -> None:
        client = FakeGreenApiClient()

        await _use_case(client).get_state(CredentialsRequest(**CREDENTIALS))

        assert client.calls[0][0] == "get_state_instance"

    @pytest.mark.asyncio
    async def test_send_message_uses_canonical_chat_id(self) -> None:
        client = FakeGreenApiClient()

        await _use_case(client).send_message(
            SendMessageRequest(**CREDENTIALS, chatId="79001234567", message="Olá")
        )

        assert client.calls == [
            ("send_message", ("1101", "secret-token", "79001234567@c.us", "Olá"))
        ]

    @pytest.mark.asyncio
    async def test_send_file_by_url_sends_derived_file_name(self) -> None:
        client = FakeGreenApiClient()

        await _use_case(client).send_file_by_url(
            SendFileByUrlRequest(
                **CREDENTIALS,
                chatId="79001234567@c.us",
                urlFile="https://cdn.example.com/a/b/photo.jpg",
            )
        )

        assert client.calls == [
            (
                "send_file_by_url",
                (
                    "1101",
                    "secret-token",
                    "79001234567@c.us",
                    "https://cdn.example.com/a/b/photo.jpg",
                    "photo.jpg",
                ),
            )
        ]

    @pytest.mark.asyncio
    async def test_upstream_server_error_is_returned_as_response(self) -> None:
        client = FakeGreenApiClient(response=json_response(500, {"error": "down"}))

        response = await _use_case(client).get_settings(CredentialsRequest(**CREDENTIALS))

        assert response.status_code == 500


class TestValidationFailures:
    """Falhas de validação nunca chegam ao upstream."""

    @pytest.mark.asyncio
    async def test_invalid_chat_id_maps_to_validation_error(self) -> None:
        client = FakeGreenApiClient()

        with pytest.raises(ApiError) as exc_info:
            await _use_case(client).send_message(
                SendMessageRequest(**CREDENTIALS, chatId="+7 900", message="hi")
            )

        error = exc_info.value
        assert error.status_code == 400
        assert error.code == VALIDATION_ERROR
        assert error.details["field"] == "chatId"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        client = FakeGreenApiClient()

        with pytest.raises(ApiError) as exc_info:
            await _use_case(client).get_state(CredentialsRequest())

        assert exc_info.value.details == {
            "field": "idInstance",
            "message": "idInstance is required",
        }
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_bad_file_url(self) -> None:
        client = FakeGreenApiClient()

        with pytest.raises(ApiError) as exc_info:
            await _use_case(client).send_file_by_url(
                SendFileByUrlRequest(
                    **CREDENTIALS, chatId="7900", urlFile="https://cdn.example.com/"
                )
            )

        assert exc_info.value.details["field"] == "urlFile"
        assert client.calls == []


class TestUpstreamFailures:
    """UpstreamError → ApiError com status por classe."""

    @pytest.mark.asyncio
    async def test_breaker_open_maps_to_503(self) -> None:
        client = FakeGreenApiClient(error=_breaker_open_error())

        with pytest.raises(ApiError) as exc_info:
            await _use_case(client).get_settings(CredentialsRequest(**CREDENTIALS))

        assert exc_info.value.status_code == 503
        assert exc_info.value.code == UPSTREAM_ERROR

    @pytest.mark.asyncio
    async def test_transport_timeout_maps_to_504(self) -> None:
        client = FakeGreenApiClient(
            error=UpstreamError("green-api request failed", httpx.ReadTimeout("slow"))
        )

        with pytest.raises(ApiError) as exc_info:
            await _use_case(client).get_settings(CredentialsRequest(**CREDENTIALS))

        assert exc_info.value.status_code == 504

    @pytest.mark.asyncio
    async def test_transport_error_maps_to_502(self) -> None:
        client = FakeGreenApiClient(
            error=UpstreamError("green-api request failed", httpx.ConnectError("refused"))
        )

        with pytest.raises(ApiError) as exc_info:
            await _use_case(client).get_settings(CredentialsRequest(**CREDENTIALS))

        assert exc_info.value.status_code == 502
        assert "green-api request failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_call_deadline_maps_to_504(self) -> None:
        client = FakeGreenApiClient(delay_seconds=5.0)

        with pytest.raises(ApiError) as exc_info:
            await _use_case(client, deadline=0.05).get_settings(
                CredentialsRequest(**CREDENTIALS)
            )

        assert exc_info.value.status_code == 504
        assert exc_info.value.message == "green-api call deadline exceeded"

    @pytest.mark.asyncio
    async def test_cancellation_is_not_converted(self) -> None:
        client = FakeGreenApiClient(delay_seconds=5.0)
        task = asyncio.create_task(
            _use_case(client).get_settings(CredentialsRequest(**CREDENTIALS))
        )
        while not client.calls:
            await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
