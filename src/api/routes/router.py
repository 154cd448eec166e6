"""Agregador de rotas — registra todos os routers do gateway.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.docs.router import router as docs_router
from api.routes.green_api.router import router as green_api_router
from api.routes.health.router import router as health_router

API_PREFIX = "/api/v1"


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health check e docs na raiz
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(docs_router, tags=["docs"])

    # Gateway Green-API
    api_router.include_router(
        green_api_router,
        prefix=API_PREFIX,
        tags=["green-api"],
    )

    return api_router
