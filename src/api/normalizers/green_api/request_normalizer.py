"""Normalizer de requests do gateway (implementa RequestNormalizerProtocol).

Ordem: validação estrutural (credenciais, campos obrigatórios, urlFile)
primeiro, depois canonicalização. Para no primeiro campo inválido.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.normalizers.green_api.normalizer import extract_file_name, normalize_chat_id
from api.validators.green_api.fields import (
    require_text,
    validate_credentials,
    validate_file_url,
)
from app.protocols.models import NormalizedRequest

if TYPE_CHECKING:
    from app.protocols.models import (
        CredentialsRequest,
        SendFileByUrlRequest,
        SendMessageRequest,
    )


class GreenApiRequestNormalizer:
    """Converte DTOs de entrada em NormalizedRequest prontos para o upstream."""

    def normalize_credentials(self, request: CredentialsRequest) -> NormalizedRequest:
        id_instance, token = validate_credentials(
            request.id_instance, request.api_token_instance
        )
        return NormalizedRequest(id_instance=id_instance, api_token_instance=token)

    def normalize_send_message(self, request: SendMessageRequest) -> NormalizedRequest:
        """Credenciais + chatId + message.

        A mensagem segue sem espaços nas bordas.
        """
        id_instance, token = validate_credentials(
            request.id_instance, request.api_token_instance
        )
        raw_chat_id = require_text(request.chat_id, "chatId")
        message = require_text(request.message, "message")
        return NormalizedRequest(
            id_instance=id_instance,
            api_token_instance=token,
            chat_id=normalize_chat_id(raw_chat_id),
            message=message,
        )

    def normalize_send_file_by_url(
        self, request: SendFileByUrlRequest
    ) -> NormalizedRequest:
        """Credenciais + chatId + urlFile, com fileName derivado da URL."""
        id_instance, token = validate_credentials(
            request.id_instance, request.api_token_instance
        )
        raw_chat_id = require_text(request.chat_id, "chatId")
        url_file = require_text(request.url_file, "urlFile")
        validate_file_url(url_file)
        return NormalizedRequest(
            id_instance=id_instance,
            api_token_instance=token,
            chat_id=normalize_chat_id(raw_chat_id),
            url_file=url_file,
            file_name=extract_file_name(url_file),
        )
