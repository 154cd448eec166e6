"""Factory de wiring para o gateway Green-API (bootstrap).

Conecta as implementações concretas da camada api (cliente HTTP,
normalizer) aos protocolos consumidos pelo use case.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from api.connectors.green_api import GreenApiHttpClient, create_green_api_http_client
from api.normalizers.green_api import GreenApiRequestNormalizer
from app.use_cases.green_api import GreenApiGatewayUseCase
from config.settings import get_green_api_settings

if TYPE_CHECKING:
    from app.protocols.http_client import GreenApiClientProtocol
    from config.settings import GreenApiSettings

logger = logging.getLogger(__name__)


def create_green_api_gateway(
    client: GreenApiClientProtocol,
    settings: GreenApiSettings | None = None,
) -> GreenApiGatewayUseCase:
    """Cria use case do gateway com dependências injetadas."""
    green_api = settings or get_green_api_settings()
    return GreenApiGatewayUseCase(
        normalizer=GreenApiRequestNormalizer(),
        client=client,
        call_deadline_seconds=green_api.call_deadline_seconds,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Singletons (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_green_api_client() -> GreenApiHttpClient:
    """Cliente Green-API do processo (singleton).

    O circuit breaker vive dentro do cliente, então todos os requests
    compartilham o mesmo estado de breaker.
    """
    client = create_green_api_http_client()
    logger.info(
        "green_api_client_created",
        extra={"breaker": client.breaker.name},
    )
    return client


@lru_cache(maxsize=1)
def get_green_api_gateway() -> GreenApiGatewayUseCase:
    """Use case do gateway ligado ao cliente singleton."""
    return create_green_api_gateway(get_green_api_client())


async def close_green_api_client() -> None:
    """Fecha o pool de conexões do cliente singleton, se criado."""
    if get_green_api_client.cache_info().currsize == 0:
        return
    client = get_green_api_client()
    await client.aclose()
    get_green_api_client.cache_clear()
    get_green_api_gateway.cache_clear()
    logger.info("green_api_client_closed")
