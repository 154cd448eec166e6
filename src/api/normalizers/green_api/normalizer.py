"""Canonicalização de chatId e extração de fileName.

Funções puras: sem I/O, sem estado. Toda falha vira ValidationError
antes de qualquer chamada ao upstream.
"""

from __future__ import annotations

from urllib.parse import unquote, urlsplit

from api.validators.green_api.errors import ValidationError

# Sufixo de endereçamento de chats individuais na Green-API
CHAT_ID_SUFFIX = "@c.us"
MAX_FILE_NAME_LENGTH = 255

_PATH_SEPARATORS = ("/", "\\")
_DOT_SEGMENTS = frozenset({"", ".", ".."})


def _is_digits(value: str) -> bool:
    # str.isdigit aceita dígitos unicode (ex: "²"); aqui só 0-9
    return bool(value) and value.isascii() and value.isdigit()


def normalize_chat_id(raw: str | None, field: str = "chatId") -> str:
    """Converte o chatId para a forma canônica `<dígitos>@c.us`.

    Args:
        raw: Valor recebido (ex: "77771234567" ou "77771234567@c.us")
        field: Nome do campo para o erro

    Returns:
        Identificador sempre com sufixo.

    Raises:
        ValidationError: "invalid chat identifier" para qualquer outro formato.
    """
    candidate = (raw or "").strip()
    if candidate.endswith(CHAT_ID_SUFFIX):
        number = candidate[: -len(CHAT_ID_SUFFIX)]
        if not _is_digits(number):
            raise ValidationError(
                field,
                f"invalid chat identifier: only digits are allowed before {CHAT_ID_SUFFIX}",
            )
        return candidate

    if not _is_digits(candidate):
        raise ValidationError(field, "invalid chat identifier: only digits are allowed")
    return candidate + CHAT_ID_SUFFIX


def extract_file_name(url: str, field: str = "urlFile") -> str:
    """Extrai o nome do arquivo do último segmento do path da URL.

    Decodificação percent-encoding é best-effort: se falhar, usa o
    segmento bruto. Nomes com separadores de path são rejeitados.

    Raises:
        ValidationError: Sem segmento final, separador no nome ou nome longo.
    """
    try:
        path = urlsplit(url.strip()).path
    except ValueError as exc:
        raise ValidationError(field, "invalid file URL") from exc

    segment = path.rsplit("/", 1)[-1]
    if segment in _DOT_SEGMENTS:
        raise ValidationError(field, "cannot extract file name from URL")

    try:
        file_name = unquote(segment, errors="strict")
    except UnicodeDecodeError:
        file_name = segment

    if any(sep in file_name or sep in segment for sep in _PATH_SEPARATORS):
        raise ValidationError(field, "invalid file name extracted from URL")
    if file_name in _DOT_SEGMENTS:
        raise ValidationError(field, "cannot extract file name from URL")
    if len(file_name) > MAX_FILE_NAME_LENGTH:
        raise ValidationError(field, "filename too long")
    return file_name
