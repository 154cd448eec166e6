"""Rotas HTTP da API — adapters de entrada do gateway.

Responsabilidades:
- Definir endpoints HTTP (gateway, health, docs)
- Parse do body JSON para os DTOs de entrada
- Delegação para o use case do gateway
- Serialização de erros no envelope padrão

Estrutura:
- routes/green_api/: endpoints /api/v1/*
- routes/health/: liveness
- routes/docs/: schema OpenAPI em YAML
- errors.py: exception handlers

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.errors import register_exception_handlers
from api.routes.router import create_api_router

__all__ = ["create_api_router", "register_exception_handlers"]
