"""Contratos canônicos de entrada e saída do gateway.

DTOs de entrada são pydantic (fronteira HTTP); os valores já
normalizados e a resposta do upstream são dataclasses imutáveis.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequest(BaseModel):
    """Credenciais da instância Green-API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id_instance: str | None = Field(default=None, alias="idInstance")
    api_token_instance: str | None = Field(default=None, alias="apiTokenInstance")


class SendMessageRequest(CredentialsRequest):
    """Envio de mensagem de texto."""

    chat_id: str | None = Field(default=None, alias="chatId")
    message: str | None = None


class SendFileByUrlRequest(CredentialsRequest):
    """Envio de arquivo por URL; o fileName é derivado da URL."""

    chat_id: str | None = Field(default=None, alias="chatId")
    url_file: str | None = Field(default=None, alias="urlFile")


@dataclass(frozen=True, slots=True)
class NormalizedRequest:
    """Valores canônicos prontos para o wire; nunca re-validados."""

    id_instance: str
    api_token_instance: str
    chat_id: str | None = None
    message: str | None = None
    url_file: str | None = None
    file_name: str | None = None


@dataclass(frozen=True, slots=True)
class UpstreamResponse:
    """Resposta opaca do upstream, repassada sem modificação."""

    status_code: int
    body: bytes
    content_type: str
    headers: Mapping[str, str] = field(default_factory=dict)
