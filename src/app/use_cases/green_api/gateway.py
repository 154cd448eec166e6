"""Use case do gateway Green-API.

Orquestra normalização → chamada ao upstream → mapeamento de erros.
Cada chamada lógica termina em exatamente uma UpstreamResponse ou um ApiError.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.protocols.validator import ValidationError
from app.services.error_mapper import map_upstream_error, map_validation_error
from utils.errors import UpstreamError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.protocols.http_client import GreenApiClientProtocol
    from app.protocols.models import (
        CredentialsRequest,
        NormalizedRequest,
        SendFileByUrlRequest,
        SendMessageRequest,
        UpstreamResponse,
    )
    from app.protocols.validator import RequestNormalizerProtocol

logger = logging.getLogger(__name__)


class GreenApiGatewayUseCase:
    """Valida, normaliza e encaminha requests ao upstream.

    Raises (em todas as operações):
        ApiError: validation_error (400) ou upstream_error (503/504/502).
    """

    def __init__(
        self,
        normalizer: RequestNormalizerProtocol,
        client: GreenApiClientProtocol,
        call_deadline_seconds: float | None = None,
    ) -> None:
        self._normalizer = normalizer
        self._client = client
        self._call_deadline_seconds = call_deadline_seconds

    async def get_settings(self, request: CredentialsRequest) -> UpstreamResponse:
        normalized = self._normalize(self._normalizer.normalize_credentials, request)
        return await self._call(
            "get_settings",
            lambda: self._client.get_settings(
                normalized.id_instance, normalized.api_token_instance
            ),
        )

    async def get_state(self, request: CredentialsRequest) -> UpstreamResponse:
        normalized = self._normalize(self._normalizer.normalize_credentials, request)
        return await self._call(
            "get_state_instance",
            lambda: self._client.get_state_instance(
                normalized.id_instance, normalized.api_token_instance
            ),
        )

    async def send_message(self, request: SendMessageRequest) -> UpstreamResponse:
        normalized = self._normalize(self._normalizer.normalize_send_message, request)
        return await self._call(
            "send_message",
            lambda: self._client.send_message(
                normalized.id_instance,
                normalized.api_token_instance,
                normalized.chat_id or "",
                normalized.message or "",
            ),
        )

    async def send_file_by_url(self, request: SendFileByUrlRequest) -> UpstreamResponse:
        normalized = self._normalize(
            self._normalizer.normalize_send_file_by_url, request
        )
        return await self._call(
            "send_file_by_url",
            lambda: self._client.send_file_by_url(
                normalized.id_instance,
                normalized.api_token_instance,
                normalized.chat_id or "",
                normalized.url_file or "",
                normalized.file_name or "",
            ),
        )

    @staticmethod
    def _normalize(
        normalize: Callable[..., NormalizedRequest], request: object
    ) -> NormalizedRequest:
        try:
            return normalize(request)
        except ValidationError as exc:
            logger.info(
                "gateway_validation_failed",
                extra={"field": exc.field, "reason": exc.message},
            )
            raise map_validation_error(exc) from exc

    async def _call(
        self,
        operation: str,
        call: Callable[[], Awaitable[UpstreamResponse]],
    ) -> UpstreamResponse:
        try:
            try:
                async with asyncio.timeout(self._call_deadline_seconds):
                    return await call()
            except TimeoutError as exc:
                # Prazo do chamador: cancela tentativa ou backoff em andamento
                raise UpstreamError("green-api call deadline exceeded") from exc
        except UpstreamError as exc:
            api_error = map_upstream_error(exc)
            logger.warning(
                "gateway_upstream_failed",
                extra={
                    "operation": operation,
                    "status_code": api_error.status_code,
                    "error_type": type(exc.__cause__).__name__ if exc.__cause__ else None,
                },
            )
            raise api_error from exc
