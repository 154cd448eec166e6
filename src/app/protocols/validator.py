"""Protocolos de validação/normalização de requests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import (
        CredentialsRequest,
        NormalizedRequest,
        SendFileByUrlRequest,
        SendMessageRequest,
    )


class ValidationError(ValueError):
    """Campo inválido; nenhuma chamada de rede deve ser feita.

    Attributes:
        field: Nome do campo no DTO de entrada (ex: "chatId")
        message: Descrição sem dados sensíveis
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def as_details(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class RequestNormalizerProtocol(Protocol):
    """Contrato mínimo para validar e normalizar requests do gateway."""

    def normalize_credentials(self, request: CredentialsRequest) -> NormalizedRequest: ...

    def normalize_send_message(self, request: SendMessageRequest) -> NormalizedRequest: ...

    def normalize_send_file_by_url(self, request: SendFileByUrlRequest) -> NormalizedRequest: ...
