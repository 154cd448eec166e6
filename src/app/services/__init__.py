"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto.
"""

from app.services.error_mapper import (
    INVALID_PAYLOAD_MESSAGE,
    map_upstream_error,
    map_validation_error,
)

__all__ = [
    "INVALID_PAYLOAD_MESSAGE",
    "map_upstream_error",
    "map_validation_error",
]
