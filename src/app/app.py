"""Entrypoint do gateway Green-API.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (direto, host/porta/shutdown das settings):
    green-gateway
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import RequestIdMiddleware
from api.routes import create_api_router, register_exception_handlers
from app.bootstrap import close_green_api_client, initialize_app, validate_runtime_settings
from app.observability.correlation import REQUEST_ID_HEADER
from config.logging import get_logger
from config.settings import get_base_settings, get_server_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

CORS_MAX_AGE_SECONDS = 12 * 60 * 60


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (falha rápido em staging/production)

    Shutdown:
    - Fecha o pool de conexões do cliente Green-API
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    await close_green_api_client()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    server = get_server_settings()

    fastapi_app = FastAPI(
        title="Green-API Gateway",
        description="Gateway JSON para a Green-API com retry e circuit breaker",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(server.cors_allowed_origins),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=CORS_MAX_AGE_SECONDS,
    )
    # Adicionado por último = mais externo: preflight também recebe X-Request-Id
    fastapi_app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(fastapi_app)
    fastapi_app.include_router(create_api_router())

    logger.info(
        "app_configured",
        extra={"cors_origins": len(server.cors_allowed_origins)},
    )

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    server = get_server_settings()
    logger.info("server_starting", extra={"host": server.host, "port": server.port})
    uvicorn.run(
        "app.app:app",
        host=server.host,
        port=server.port,
        timeout_graceful_shutdown=server.shutdown_timeout_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    main()
