"""Normalizers — conversão de campos externos em valores canônicos.

Estrutura:
- green_api/: chatId com sufixo @c.us e fileName extraído de URL
"""

from .green_api import extract_file_name, normalize_chat_id

__all__ = [
    "extract_file_name",
    "normalize_chat_id",
]
