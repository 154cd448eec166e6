"""Protocolos e contratos do core da aplicação."""

from .http_client import GreenApiClientProtocol
from .models import (
    CredentialsRequest,
    NormalizedRequest,
    SendFileByUrlRequest,
    SendMessageRequest,
    UpstreamResponse,
)
from .validator import RequestNormalizerProtocol, ValidationError

__all__ = [
    "CredentialsRequest",
    "GreenApiClientProtocol",
    "NormalizedRequest",
    "RequestNormalizerProtocol",
    "SendFileByUrlRequest",
    "SendMessageRequest",
    "UpstreamResponse",
    "ValidationError",
]
