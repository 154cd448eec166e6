"""Exceções utilitárias compartilhadas."""

from .exceptions import InfrastructureError, UpstreamError

__all__ = [
    "InfrastructureError",
    "UpstreamError",
]
