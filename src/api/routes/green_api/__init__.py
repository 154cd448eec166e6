"""Rotas do gateway Green-API."""

from api.routes.green_api.router import get_gateway, router

__all__ = ["get_gateway", "router"]
