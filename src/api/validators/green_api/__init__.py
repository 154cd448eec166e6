"""Validadores de entrada do gateway Green-API.

Uso:
    from api.validators.green_api import ValidationError, validate_credentials

    id_instance, token = validate_credentials(raw_id, raw_token)
"""

from api.validators.green_api.errors import ValidationError
from api.validators.green_api.fields import (
    ALLOWED_FILE_URL_SCHEMES,
    require_text,
    validate_credentials,
    validate_file_url,
)

__all__ = [
    "ALLOWED_FILE_URL_SCHEMES",
    "ValidationError",
    "require_text",
    "validate_credentials",
    "validate_file_url",
]
