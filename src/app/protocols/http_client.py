"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import UpstreamResponse


class GreenApiClientProtocol(Protocol):
    """Contrato mínimo para o cliente do upstream Green-API."""

    async def get_settings(
        self, id_instance: str, api_token_instance: str
    ) -> UpstreamResponse: ...

    async def get_state_instance(
        self, id_instance: str, api_token_instance: str
    ) -> UpstreamResponse: ...

    async def send_message(
        self,
        id_instance: str,
        api_token_instance: str,
        chat_id: str,
        message: str,
    ) -> UpstreamResponse: ...

    async def send_file_by_url(
        self,
        id_instance: str,
        api_token_instance: str,
        chat_id: str,
        url_file: str,
        file_name: str,
    ) -> UpstreamResponse: ...
