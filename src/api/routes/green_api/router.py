"""Endpoints do gateway Green-API.

Endpoints (prefixo /api/v1):
- POST /settings: configurações da instância
- POST /state: estado de conexão da instância
- POST /send-message: envio de mensagem de texto
- POST /send-file-by-url: envio de arquivo por URL

A resposta do upstream é repassada sem modificação (status, corpo e
content-type). Erros saem no envelope `{"error": {...}}` via handlers
registrados em api.routes.errors.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.protocols.models import (
    CredentialsRequest,
    SendFileByUrlRequest,
    SendMessageRequest,
    UpstreamResponse,
)
from app.use_cases.green_api import GreenApiGatewayUseCase

DEFAULT_CONTENT_TYPE = "application/json"

_ERROR_RESPONSES: dict[int | str, dict[str, str]] = {
    400: {"description": "validation_error ou bad_request"},
    502: {"description": "upstream_error (falha de transporte)"},
    503: {"description": "upstream_error (circuit breaker aberto)"},
    504: {"description": "upstream_error (prazo excedido)"},
}

router = APIRouter(responses=_ERROR_RESPONSES)


def get_gateway() -> GreenApiGatewayUseCase:
    """Dependency do use case (substituível em testes via dependency_overrides)."""
    from app.bootstrap import get_green_api_gateway

    return get_green_api_gateway()


Gateway = Annotated[GreenApiGatewayUseCase, Depends(get_gateway)]


def proxy_response(upstream: UpstreamResponse) -> Response:
    """Repassa status, corpo e content-type do upstream."""
    return Response(
        content=upstream.body,
        status_code=upstream.status_code,
        media_type=upstream.content_type or DEFAULT_CONTENT_TYPE,
    )


@router.post("/settings", summary="Lê as configurações da instância")
async def read_settings(body: CredentialsRequest, gateway: Gateway) -> Response:
    return proxy_response(await gateway.get_settings(body))


@router.post("/state", summary="Lê o estado de conexão da instância")
async def read_state(body: CredentialsRequest, gateway: Gateway) -> Response:
    return proxy_response(await gateway.get_state(body))


@router.post("/send-message", summary="Envia mensagem de texto")
async def send_message(body: SendMessageRequest, gateway: Gateway) -> Response:
    return proxy_response(await gateway.send_message(body))


@router.post("/send-file-by-url", summary="Envia arquivo hospedado em URL")
async def send_file_by_url(body: SendFileByUrlRequest, gateway: Gateway) -> Response:
    return proxy_response(await gateway.send_file_by_url(body))
