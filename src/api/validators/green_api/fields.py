"""Validação estrutural dos campos de entrada.

Executa antes da normalização e para no primeiro campo inválido.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from api.validators.green_api.errors import ValidationError

ALLOWED_FILE_URL_SCHEMES = frozenset({"http", "https"})

# Credenciais viram segmentos do path upstream
FORBIDDEN_CREDENTIAL_CHARS = frozenset("/\\?#%")


def require_text(value: str | None, field: str) -> str:
    """Retorna o valor sem espaços nas bordas ou falha se vazio.

    Raises:
        ValidationError: Se ausente ou vazio após trim.
    """
    text = (value or "").strip()
    if not text:
        raise ValidationError(field, f"{field} is required")
    return text


def validate_credential(value: str | None, field: str) -> str:
    """Exige um único segmento de path: sem separadores, espaços ou `..`.

    Raises:
        ValidationError: Se vazio ou com caracteres inválidos.
    """
    text = require_text(value, field)
    if (
        ".." in text
        or any(ch in FORBIDDEN_CREDENTIAL_CHARS for ch in text)
        or any(ord(ch) <= 0x20 or ord(ch) == 0x7F for ch in text)
    ):
        raise ValidationError(field, f"{field} contains invalid characters")
    return text


def validate_credentials(id_instance: str | None, api_token_instance: str | None) -> tuple[str, str]:
    """Valida credenciais da instância (presentes e seguras como segmento de path).

    Returns:
        (id_instance, api_token_instance) sem espaços nas bordas.
    """
    return (
        validate_credential(id_instance, "idInstance"),
        validate_credential(api_token_instance, "apiTokenInstance"),
    )


def validate_file_url(raw: str, field: str = "urlFile") -> None:
    """Exige URI absoluta com esquema exatamente http ou https.

    Raises:
        ValidationError: "invalid file URL" em qualquer outro formato.
    """
    candidate = raw.strip()
    if not candidate or any(ord(ch) <= 0x20 or ord(ch) == 0x7F for ch in candidate):
        raise ValidationError(field, "invalid file URL")
    try:
        parsed = urlsplit(candidate)
        # .port valida a porta (levanta ValueError se inválida)
        parsed.port  # noqa: B018
    except ValueError as exc:
        raise ValidationError(field, "invalid file URL") from exc
    if parsed.scheme not in ALLOWED_FILE_URL_SCHEMES or not parsed.hostname:
        raise ValidationError(field, "invalid file URL: must be an absolute http or https URL")
