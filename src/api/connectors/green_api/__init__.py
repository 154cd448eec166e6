"""Connector Green-API — cliente HTTP resiliente para o upstream.

Uso:
    from api.connectors.green_api import create_green_api_http_client

    client = create_green_api_http_client()
    response = await client.send_message(id_instance, token, chat_id, "Olá")
"""

from api.connectors.green_api.http_base import (
    SERVER_ERROR_THRESHOLD,
    HttpClient,
    HttpClientConfig,
    is_retryable_error,
)
from api.connectors.green_api.http_client import (
    GreenApiHttpClient,
    create_green_api_http_client,
)
from app.protocols.models import UpstreamResponse

__all__ = [
    "SERVER_ERROR_THRESHOLD",
    "GreenApiHttpClient",
    "HttpClient",
    "HttpClientConfig",
    "UpstreamResponse",
    "create_green_api_http_client",
    "is_retryable_error",
]
