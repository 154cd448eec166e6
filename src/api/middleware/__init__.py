"""Middlewares HTTP do gateway."""

from api.middleware.request_id import RequestIdMiddleware

__all__ = ["RequestIdMiddleware"]
