"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="green-gateway")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("upstream_response", extra={"status_code": 200})

Campos obrigatórios em todo log:
- asctime
- level
- logger
- message
- correlation_id
- service

Tokens de instância (apiTokenInstance) nunca entram nos logs.
"""

from config.logging.config import VALID_LOG_LEVELS, configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter, mask_instance_token
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "VALID_LOG_LEVELS",
    # Filters
    "CorrelationIdFilter",
    "mask_instance_token",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
]
