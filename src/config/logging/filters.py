"""Filters de logging do gateway.

Campos injetados:
- correlation_id: X-Request-Id da requisição em andamento
- service: Nome do serviço (ex: green-gateway)

Também mascara o apiTokenInstance em paths Green-API
(`/waInstance{id}/{método}/{token}`), inclusive em logs de terceiros
como o `HTTP Request: POST https://...` do httpx.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

TOKEN_MASK = "***"

# Extras que podem carregar path ou URL do upstream
_PATH_FIELDS = ("path", "url")

_INSTANCE_PATH_RE = re.compile(r"(/waInstance[^/\s]+/[^/\s]+/)[^/?#\s\"']+")


def mask_instance_token(text: str) -> str:
    """Substitui o token de cada path Green-API em `text` por `***`."""
    return _INSTANCE_PATH_RE.sub(rf"\g<1>{TOKEN_MASK}", text)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service e mascara tokens em cada record.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; se correlation_id veio via `extra`, preserva.

        Returns:
            True sempre (não filtra, apenas enriquece).
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        _mask_record(record)
        return True


def _mask_record(record: logging.LogRecord) -> None:
    message = record.getMessage()
    masked = mask_instance_token(message)
    if masked != message:
        # Mensagem já interpolada; args descartados
        record.msg = masked
        record.args = ()
    for field in _PATH_FIELDS:
        value = getattr(record, field, None)
        if isinstance(value, str):
            setattr(record, field, mask_instance_token(value))
