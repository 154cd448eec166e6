"""Normalizer Green-API — chatId canônico e fileName seguro."""

from api.normalizers.green_api.normalizer import (
    CHAT_ID_SUFFIX,
    MAX_FILE_NAME_LENGTH,
    extract_file_name,
    normalize_chat_id,
)
from api.normalizers.green_api.request_normalizer import GreenApiRequestNormalizer

__all__ = [
    "CHAT_ID_SUFFIX",
    "MAX_FILE_NAME_LENGTH",
    "GreenApiRequestNormalizer",
    "extract_file_name",
    "normalize_chat_id",
]
